"""
Setup script for the Capitalist World CLI.
"""

from setuptools import setup, find_packages

setup(
    name="capitalist-world",
    version="0.1.0",
    description="Terminal business simulation with a live, pinned status line",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    author="Capitalist World Team",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "rich>=13.0.0",
        "pydantic>=2.0.0",
        "python-dotenv>=1.0.0",
        "pyyaml>=6.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "hypothesis>=6.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "capitalist-world=capitalist_world.main:cli",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Console",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
