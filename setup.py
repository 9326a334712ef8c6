from setuptools import setup

setup(
    name="blackhole",
    version="0.1.0",
    description="Black Hole board engine (triangular board) with a Monte Carlo player",
    py_modules=[
        "blackhole_board",
        "blackhole_arena",
        "blackhole_tester",
        "random_player",
        "monte_carlo_player",
    ],
    python_requires=">=3.10",
    install_requires=["numpy"],
    extras_require={"test": ["pytest"]},
)
