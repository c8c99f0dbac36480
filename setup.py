# Always prefer setuptools over distutils
from setuptools import setup

setup(
	name='openjdk_native',
	version='1.0.0',
	description='Ensures a native OpenJDK is installed and selected on RedHat-like machines',
	long_description='A pexpect-based provisioning helper that installs a native OpenJDK package (and its devel package) via yum on a RedHat-like machine, locally or over ssh, and switches the system java alternative to it.',
	author='The openjdk_native developers',
	author_email='',
	license='MIT',
	keywords='OpenJDK java yum rpm alternatives pexpect provisioning',
	python_requires='>=3.6',
	py_modules=['openjdk_native',
	            'openjdk_config',
	            'openjdk_installer',
	            'openjdk_log',
	            'openjdk_module',
	            'openjdk_package',
	            'openjdk_pexpect',
	            'openjdk_sudoers',
	            'openjdk_target',
	            'openjdk_util'],
	install_requires=['pexpect>=4.0','jinja2>=2.0','texttable>=0.8'],
	extras_require={
		'dev': [],
		'test': ['pytest'],
	},
	package_data={},
	data_files=[],
	entry_points={
		'console_scripts': [
			'openjdk_native=openjdk_native:main',
		],
	},
)
