#!/usr/bin/env python
from setuptools import setup, find_packages

setup(
    name="gitlab-api-client",
    version="0.1.0",
    description="Typed client for GitLab instance CI variables and Sidekiq metrics APIs",
    author="Platform Tooling Team",
    author_email="platform-tooling@example.com",
    url="https://github.com/example/gitlab-api-client",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.9,<3.14",
    install_requires=[
        # HTTP transport
        "httpx>=0.27.0",
        "tenacity>=8.2.0",

        # Models and configuration
        "pydantic>=2.7.0",
        "pydantic-settings>=2.2.0",
        "python-dotenv>=1.0.1",

        # Logging
        "structlog>=24.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.1.0",
            "pytest-cov>=4.2.0",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "License :: OSI Approved :: MIT License",
    ],
)
