from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="gcp-inventory-exporter",
    version="1.0.0",
    author="Your Organization",
    author_email="gcp-inventory-exporter@your-org.com",
    description="Concurrent multi-project GCP resource inventory exported to Excel",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/your-org/gcp-inventory-exporter",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: System Administrators",
        "Topic :: System :: Systems Administration",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    install_requires=[
        "google-cloud-compute>=1.14.0",
        "google-cloud-storage>=2.10.0",
        "google-cloud-resource-manager>=1.10.0",
        "google-api-core>=2.11.0",
        "pyyaml>=6.0",
        "click>=8.1.0",
        "pandas>=1.5.0",
        "openpyxl>=3.1.0",
        "tabulate>=0.9.0",
        "tqdm>=4.65.0",
        "colorlog>=6.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.2.0",
            "pytest-cov>=4.0.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "gcp-inventory-exporter=gcp_inventory_exporter.cli:cli",
        ],
    },
)
