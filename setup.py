# setup.py
from __future__ import annotations

from pathlib import Path

from setuptools import find_packages, setup

README = Path(__file__).with_name("README.md")
long_description = README.read_text(encoding="utf-8") if README.exists() else ""
PACKAGE_NAME = "m6aprediction"

install_requires = [
    "numpy>=1.24",
    "pandas>=2.0",
    "scikit-learn>=1.3",
    "appdirs>=1.4.4",
]

extras_require = {
    "tests": [
        "pytest>=8.4.1",
        "pytest-cov>=5.0.0",
    ],
    "dev": [
        "black>=24.3.0",
        "ruff>=0.4.0",
        "mypy>=1.8.0",
        "build>=1.0.0",
        "twine>=5.0.0",
    ],
}

setup(
    name=PACKAGE_NAME,
    version="0.1.0",
    description="m6A site prediction from DNA 5-mer encodings and transcript features with a pre-fitted classifier.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="GPL-3.0-only",
    packages=find_packages(exclude=("tests", "tests.*", "docs", "examples")),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=install_requires,
    extras_require=extras_require,
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Operating System :: OS Independent",
    ],
    keywords=[
        "m6A", "RNA methylation", "bioinformatics", "k-mers", "DNA encoding", "classification",
    ],
    zip_safe=False,
)
