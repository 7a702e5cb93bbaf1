from setuptools import setup, find_packages

setup(
    name="assertrite",
    version="0.1.0",
    author="Sanic Community",
    author_email="tronic@noreply.users.github.com",
    description="Colorized, diffing failure reports for test assertions",
    long_description=open("README.md", encoding="UTF-8").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(include=["assertrite", "assertrite.*"]),
    python_requires=">=3.9",
    classifiers = [
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    install_requires = ["html5tagger>=1.2.1"],
    extras_require = {"test": ["pytest", "coverage", "beautifulsoup4"]},
)
