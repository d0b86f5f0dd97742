"""Setup script for the Vilkas harness."""

from setuptools import setup, find_namespace_packages

if __name__ == "__main__":
    setup(
        name="vilkas-harness",
        version="0.1.0",
        description="Integration-test harness and HTTP client for the Vilkas recommendation service",
        author="Vilkas Team",
        packages=find_namespace_packages(where="src"),
        package_dir={"": "src"},
        entry_points={
            "console_scripts": [
                "vilkas-harness=vilkas_harness.cli:app",
            ],
        },
        python_requires=">=3.11",
        install_requires=[
            "requests>=2.31",
            "pydantic>=2.5",
            "pydantic-settings>=2.1",
            "typer>=0.9",
        ],
        extras_require={
            "test": [
                "pytest>=7.4",
            ],
        },
    )
