from setuptools import setup, find_packages

setup(
    name="mbclient",
    version="0.1.0",
    description="REST transport for a mountebank imposter client",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"mbclient.configs": ["config.yml"]},
    install_requires=[
        "requests",
        "pydantic>=2",
        "python-dotenv",
        "PyYAML",
        "rich",
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.8",
)
