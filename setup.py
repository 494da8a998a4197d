#!/usr/bin/env python3

from setuptools import setup


setup(
    name="urlshort",
    version="0",
    description="redirects request paths to URLs listed in a map or YAML file",
    author="Michael Enßlin",
    author_email="michael@ensslin.cc",
    packages=("urlshort",),
    install_requires=("flask", "Werkzeug", "PyYAML"),
    extras_require={"test": ("pytest",)},
    entry_points={"console_scripts": ("urlshort = urlshort.__main__:main",)},
)
