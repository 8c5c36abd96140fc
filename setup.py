import os
from setuptools import setup

with open("README.md") as readme_file:
    readme = readme_file.read()

this = os.path.dirname(os.path.realpath(__file__))


def read(name):
    with open(os.path.join(this, name)) as f:
        return f.read()

VERSION = "1.0.0"


setup(
    name="battery-ctl",
    version=VERSION,
    description="Laptop battery charging policy controller for Linux",
    long_description=readme,
    long_description_content_type="text/markdown",
    packages=[
        "battery_ctl",
        "battery_ctl.backends",
        "battery_ctl.bin",
        "battery_ctl.config",
    ],
    python_requires=">=3.10",
    install_requires=read("requirements.txt"),
    extras_require={"test": ["pytest"]},
    include_package_data=True,
    zip_safe=True,
    license="GPLv3",
    keywords="linux battery charge threshold thinkpad tpacpi-bat discharge",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: End Users/Desktop",
        "Operating System :: POSIX :: Linux",
        "Environment :: Console",
        "Natural Language :: English",
    ],
    scripts=["bin/battery-ctl"],
)
