"""
Setup script for the fix-augment text pipeline
"""

from setuptools import find_packages, setup

requirements = [
    "pydantic>=2.7",
    "pydantic-settings>=2.3",
    "markdown>=3.5",
    "pygments>=2.17",
]

setup(
    name="fix-augment",
    version="0.3.0",
    description=(
        "Input sanitizing, fence-aware chunking and reply formatting for "
        "size-constrained AI assistants"
    ),
    package_dir={"": "src"},
    packages=find_packages("src"),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
    python_requires=">=3.11",
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=8", "pytest-asyncio>=0.23"],
    },
    entry_points={
        "console_scripts": ["fix-augment=fix_augment.__main__:main"],
    },
)
