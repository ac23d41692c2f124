"""Setup configuration for snapdiff."""

from setuptools import setup, find_packages

setup(
    name="snapdiff",
    version="0.1.0",
    description="Visual regression test orchestration",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",
    install_requires=[
        "pyyaml>=6.0",
        "click>=8.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "snapdiff=snapdiff.cli:main",
        ],
    },
)
