import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="flacmeta",
    version="1.0.0",
    author="flacmeta contributors",
    author_email="",
    packages=[
        'flacmeta',
        'flacmeta.formats',
    ],
    entry_points={
        'console_scripts': [
            'flacmeta = flacmeta.__main__:main',
        ],
    },
    description="read and rewrite FLAC metadata blocks without touching the audio",
    long_description=long_description,
    long_description_content_type="text/markdown",
    python_requires='>=3.7',
    install_requires=[
        'construct',
        'Pillow',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
)
