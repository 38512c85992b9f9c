from setuptools import setup, find_packages


setup(
    name='symlang',
    version='1.0.0',
    description='Language aware demangling of crash report symbols.',
    license='BSD',
    packages=find_packages(exclude=('tests',)),
    include_package_data=True,
    zip_safe=False,
    platforms='posix',
    python_requires='>=3.6',
    install_requires=[
        'cffi>=1.0.0',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    classifiers=[
        'Intended Audience :: Developers',
        'License :: OSI Approved :: BSD License',
        'Operating System :: POSIX',
        'Operating System :: MacOS :: MacOS X',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Software Development :: Debuggers',
        'Topic :: Software Development :: Libraries :: Python Modules'
    ],
)
