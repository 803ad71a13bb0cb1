"""Setup script for dynamic-if: ensures package discovery works with setuptools."""
from setuptools import setup, find_packages

# Explicit package discovery for reliable build (editable and wheel)
setup(
    name="dynamic-if",
    version="0.1.0",
    description="If/else-if/else editor block whose cases grow and shrink under drag and drop",
    python_requires=">=3.10",
    packages=find_packages(where=".", include=("dynamic_if", "dynamic_if.*")),
    package_dir={"": "."},
    install_requires=[
        "omegaconf>=2.3",
        "lxml>=4.9",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": ["dynamic-if=dynamic_if.cli:main"],
    },
)
