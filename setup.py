from pathlib import Path
from setuptools import setup, find_packages

setup(
    name="arcanum-cube-solver",
    version="0.1",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["networks", "runner"],
    install_requires=[
        line.strip() for line in Path("requirements.txt").read_text().splitlines()
        if line.strip() and not line.startswith("#")
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["cube-solve=runner:main"],
    },
)
