import logging

from setuptools import setup, find_packages

log = logging.getLogger(__name__)

setup(
	name='storefront_core',
	version='0.1.0.dev0',
	packages=find_packages(include=['storefront_core', 'storefront_core.*']),
	description='Promotion, voucher and loyalty logic of the storefront backend',
	install_requires=[
		'gconf',
		'tinydb',
		'tinydb-serialization',
		'pydantic==1.*',
		'blinker',
	],
	extras_require={
		'dev': [
			'setuptools',
			'ruff',
			'pytest',
			'pytest-mock',
		]
	},
	package_data={'': ['config.yml']},
)
