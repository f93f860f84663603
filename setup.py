from setuptools import setup, find_packages

setup(
    name="newsrank",
    version="0.1.0",
    description="NewsRank - Recommendations, similar articles and topic groups for news feeds",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "mistune>=2.0.0",
        "pyyaml>=6.0",
        "requests>=2.25.0",
        "tqdm>=4.62.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "newsrank=newsrank.cli:main",
        ],
    },
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
    ],
)
