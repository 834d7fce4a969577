"""PremiumPool setup - escrow ledger for commodity-sale premiums."""
from setuptools import setup, find_packages

setup(
    name="premiumpool",
    version="0.1.0",
    description="PremiumPool: escrow-and-settlement ledger for commodity-sale premiums",
    packages=find_packages(include=["premiumpool", "premiumpool.*", "premiumpool_cli"]),
    python_requires=">=3.10",
    install_requires=[
        "click>=8.0",
        "blake3>=0.3",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "pool=premiumpool_cli.main:cli",
        ],
    },
)
