from setuptools import setup, find_namespace_packages

setup(
    name="qa-browser",
    version="0.1.0",
    description="Faceted browser for static quiz question banks",
    packages=find_namespace_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.9",
    install_requires=[
        "PyYAML>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "qa-browser=qa_browser.cli:main",
        ],
    },
)
