from setuptools import setup

VERSION = "0.1.0"

setup(
    name="metricport",
    version=VERSION,
    license="GPL v3",
    description=("Vendor neutral metrics port with an in-memory reference adapter"),
    long_description=(""),
    classifiers=[
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Operating System :: OS Independent",
        "Topic :: System :: Monitoring",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
    keywords=["metrics", "monitoring", "prometheus", "opentelemetry"],
    zip_safe=False,
    platforms="any",
    python_requires=">=3.11",
    packages=["metricport", "metricport.adapters"],
    install_requires=["async_timeout>=4.0.3"],
    extras_require={
        "test": ["pytest>=8.0", "pytest-asyncio>=0.23", "pytest-codspeed>=2.2"],
    },
    include_package_data=True)
