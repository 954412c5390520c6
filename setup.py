"""
Taskboard setup.py — Package configuration and CLI entry point.
"""

from setuptools import find_packages, setup

setup(
    name="taskboard",
    version="1.0.0",
    description="Taskboard — team task management on Reflex",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",
    entry_points={
        "console_scripts": [
            "taskboard=taskboard.cli:main",
        ],
    },
    install_requires=[
        "reflex>=0.6.0",
        "sqlalchemy>=2.0,<2.1",
        "psycopg2-binary>=2.9",
        "pydantic>=2.5",
        "bcrypt>=4.1",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
)
