from setuptools import setup, find_packages

setup(
    name="GfycatSDK",
    version="0.1.0",
    description="An async friendly client for the Gfycat API",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(include=['GfycatSDK', 'GfycatSDK.*']),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires='>=3.10',
    install_requires=[
        "httpx",
        "pydantic>=2",
        "tenacity",
        "structlog",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
)
