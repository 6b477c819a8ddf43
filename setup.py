"""
Setup script for the cycloscan package.
"""

from setuptools import setup, find_packages
import os

# Read the README
readme_path = os.path.join(os.path.dirname(__file__), 'README.md')
if os.path.exists(readme_path):
    with open(readme_path, 'r', encoding='utf-8') as f:
        long_description = f.read()
else:
    long_description = "Per-function cyclomatic complexity analyzer for C and C++."

setup(
    name="cycloscan",
    version="1.0.0",
    author="Cycloscan Team",
    author_email="cycloscan@example.com",
    description="Static cyclomatic complexity analyzer for C and C++ translation units",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/cycloscan/cycloscan",
    packages=find_packages(exclude=["tests", "tests.*", "examples", "examples.*"]),
    python_requires=">=3.9",
    install_requires=[
        "tree-sitter>=0.23",
        "tree-sitter-c>=0.23",
        "tree-sitter-cpp>=0.23",
        "pyyaml>=6.0",
    ],
    extras_require={
        "clang": ["libclang>=16.0"],
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=4.0",
            "libclang>=16.0",
            "black>=23.0",
            "mypy>=1.0",
            "ruff>=0.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "cycloscan=cycloscan.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: C",
        "Programming Language :: C++",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Quality Assurance",
    ],
    keywords="cyclomatic-complexity, static-analysis, metrics, c, cpp, tree-sitter, libclang",
    project_urls={
        "Bug Reports": "https://github.com/cycloscan/cycloscan/issues",
        "Source": "https://github.com/cycloscan/cycloscan",
    },
)
