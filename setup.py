"""Setup configuration for healthreport"""

from setuptools import setup, find_packages

setup(
    name="github-community-health-report",
    version="0.1.0",
    description=(
        "CLI tool for GitHub community health KPIs: external contributions, "
        "team review counts and first-response times."
    ),
    author="GitHub Community Health Report Contributors",
    author_email="",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "requests>=2.28.0",
        "python-dateutil>=2.8.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "black>=22.0",
            "flake8>=4.0",
            "mypy>=0.950",
        ],
    },
    entry_points={
        "console_scripts": [
            "community-health-report=healthreport.main:main",
        ],
    },
)
