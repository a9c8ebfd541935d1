from setuptools import setup

from os import path
this_directory = path.abspath(path.dirname(__file__))
with open(path.join(this_directory, 'README.md'), encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='fuguescore',
    version='1.0.0',
    description='Scoring dissonance treatment in two-voice counterpoint',
    long_description=long_description,
    long_description_content_type='text/markdown',
    author='fuguescore contributors',
    classifiers=['Programming Language :: Python :: 3',
                 'Operating System :: OS Independent',
                 'License :: OSI Approved :: BSD License',
                 ],
    package_dir={'fuguescore': 'fuguescore'},
    packages=['fuguescore'],
    include_package_data=True,
    python_requires='>=3.7, <4',
    install_requires=['music21'],
    extras_require={'test': ['pytest']},
)
