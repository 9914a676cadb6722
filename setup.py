# === FILE: setup.py ===
from setuptools import setup, find_packages

setup(
    name="site_harvest",
    version="0.1.0",
    description="Bounded, polite web crawler that extracts page metadata to JSON or CSV",
    packages=find_packages(include=["site_harvest", "site_harvest.*"]),
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "soupsieve>=2.5",
        "click>=8.1",
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
            "site-harvest=site_harvest.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
