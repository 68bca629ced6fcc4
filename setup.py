"""
Setup configuration for Sway Workspace Labels.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read long description from README if it exists
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text() if readme_file.exists() else ""

setup(
    name="sway-workspace-labels",
    version="1.0.0",
    description="Rename sway workspaces after their focused application and window layout",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="NixOS Configuration Team",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "i3ipc>=2.2.1",
        "pydantic>=2.0",
    ],
    python_requires=">=3.11",
    entry_points={
        "console_scripts": [
            "sway-workspace-labels=sway_workspace_labels.daemon:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: Desktop Environment :: Window Managers",
    ],
    extras_require={
        "journal": [
            "systemd-python>=235",
        ],
        "test": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
        ],
    },
)
