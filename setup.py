"""
Setup file.
"""

import os

from setuptools import find_packages, setup

KEYWORDS = "kernel assembly binutils cargo build-script riscv static-archive"
HERE = os.path.dirname(os.path.abspath(__file__))


if __name__ == "__main__":
    setup(
        name="mason",
        version="0.2.0",
        description="Assemble and package low-level code for linking into a kernel",
        keywords=KEYWORDS,
        python_requires=">=3.8",
        package_dir={"": "src"},
        packages=find_packages(where="src"),
        install_requires=[
            "toml>=0.10",
            "tqdm>=4.0",
        ],
        extras_require={
            "test": ["pytest>=7.0"],
        },
        entry_points={
            "console_scripts": [
                "mason=mason.cli:main",
            ],
        },
        include_package_data=True)
