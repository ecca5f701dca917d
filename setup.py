"""Setup configuration for payment-api-tester."""

from setuptools import setup, find_packages

setup(
    name="payment-api-tester",
    version="0.1.0",
    description="Conformance test harness for the payment instructions API",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"payment_tester.catalog": ["*.yaml"]},
    python_requires=">=3.9",
    install_requires=[
        "requests>=2.31.0",
        "pyyaml>=6.0",
        "click>=8.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "payment-tester=payment_tester.cli:main",
        ],
    },
)
