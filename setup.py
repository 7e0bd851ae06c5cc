import os
here = os.path.abspath(os.path.dirname(__file__))
exec(compile(open(os.path.join(here, 'gardenvariety', 'release.py')).read(), 'release.py', 'exec'), globals(), locals())

from setuptools import find_packages, setup

import sys
py_version = sys.version_info[:2]

if py_version < (3, 8):
    raise RuntimeError('GardenVariety requires at least Python3.8')

test_requirements = ['pytest',
                     'WebTest',
                     'sqlalchemy >= 1.4.24',
                     'coverage']

install_requires=[
    'WebOb >= 1.8.0',
    'repoze.lru',
    'MarkupSafe',
    'inflect',
    'FormEncode >= 2.0.0',
]

setup(
    name='GardenVariety',
    version=version,
    description=description,
    long_description=long_description,
    classifiers=[
        'Intended Audience :: Developers',
        'Environment :: Web Environment',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Internet :: WWW/HTTP',
        'Topic :: Internet :: WWW/HTTP :: WSGI',
    ],
    keywords='rest crud controllers flash webob',
    author=author,
    author_email=email,
    url=url,
    license=license,
    packages=find_packages(exclude=('ez_setup', 'examples', 'tests', 'tests.*')),
    include_package_data=True,
    zip_safe=False,
    install_requires=install_requires,
    extras_require={
       'sqlalchemy': ['sqlalchemy >= 1.4.24'],
       'testing': test_requirements,
    },
    tests_require = test_requirements,
    entry_points='''
    '''
)
