# setup.py
from setuptools import setup, find_packages

setup(
    name="website2pdf",
    version="0.1.0",
    description="Print every page of a website's sitemap to PDF with headless Chromium",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"website2pdf.report": ["templates/*.j2"]},
    install_requires=[
        "aiohttp>=3.9",
        "click>=8.1",
        "jinja2>=3.1",
        "lxml>=5.0",
        "playwright>=1.40",
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
        "console_scripts": ["website2pdf=website2pdf.cli:cli"],
    },
    python_requires=">=3.11",
)
