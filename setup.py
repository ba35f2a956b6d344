from setuptools import setup, find_packages

setup(
    name="recipe_md",
    version="0.1",
    packages=find_packages(exclude=["tests", "tests.*"]),
    description=(
        "A parser for recipes written in a constrained markdown dialect, "
        "producing a typed and validated recipe model."
    ),
    install_requires=["marko>=2.0", "peggie>=0.2.0", "PyYAML>=5.1"],
    extras_require={"test": ["pytest", "mypy", "types-PyYAML"]},
)
