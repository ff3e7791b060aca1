# setup.py
from setuptools import setup, find_packages

setup(
    name="docs_loader",
    version="0.1.0",
    description="Depth-bounded documentation crawler that saves pages as markdown-like text",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"docs_loader": ["templates/*.j2"]},
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "click>=8.1",
        "jinja2>=3.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "docs-loader=docs_loader.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
