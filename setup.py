from setuptools import setup, find_packages

setup(
    name="smartadd",
    version="0.1.0",
    description="AI-assisted add & update for college/court admin collections",
    packages=find_packages(include=["smartadd", "smartadd.*"]),
    install_requires=[
        "typer",
        "rich",
        "readchar",
        "httpx",
        "openai",
        "python-dotenv",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-socket",
        ],
    },
    entry_points={
        "console_scripts": [
            "smartadd=smartadd.cli.app:app",
        ],
    },
    python_requires=">=3.11",
)
