from pathlib import Path

import setuptools

this_directory = Path(__file__).parent
long_description = (this_directory / "README.rst").read_text()

test_dependencies = ["pytest"]


setuptools.setup(
    name="poisson-disk",
    version="0.1.0",
    description="Accurate multidimensional Poisson-disk sampling in the unit hypercube.",
    long_description=long_description,
    long_description_content_type="text/x-rst",
    packages=["poisson_disk"],
    classifiers=[
        "Development Status :: 3 - Alpha",
        "License :: OSI Approved :: MIT License",
        "Operating System :: Unix",
        "Operating System :: MacOS",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
    ],
    keywords="poisson disk blue noise sampling dart throwing procedural generation",
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.18",
        "scipy",
        "pandas",
        "tqdm",
        "typer",
    ],
    test_suite="pytest",
    tests_require=test_dependencies,
    extras_require={"test": test_dependencies},
)
