"""Stores the known OpenJDK packages for RedHat-like distributions.
"""

#The MIT License (MIT)
#
#Copyright (C) 2014 OpenBet Limited
#
#Permission is hereby granted, free of charge, to any person obtaining a copy of
#this software and associated documentation files (the "Software"), to deal in
#the Software without restriction, including without limitation the rights to
#use, copy, modify, merge, publish, distribute, sublicense, and/or sell copies
#of the Software, and to permit persons to whom the Software is furnished to do
#so, subject to the following conditions:
#
#The above copyright notice and this permission notice shall be included in all
#copies or substantial portions of the Software.
#
#THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
#IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
#ITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL
#THE AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
#LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
#OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
#SOFTWARE.

from openjdk_module import OpenJDKPackageError

DEVEL_SUFFIX = '-devel'


class OpenJDKPackage(object):
	"""An OpenJDK version and the rpm package that provides it.

	Only the logical name and the base package are stored; the devel and jre
	names are always derived from the base package.
	"""

	__slots__ = ('_name', '_package_name')

	def __init__(self, name, package_name):
		object.__setattr__(self, '_name', name)
		object.__setattr__(self, '_package_name', package_name)

	def __setattr__(self, name, value):
		raise AttributeError('OpenJDKPackage is immutable')

	def __repr__(self):
		return 'OpenJDKPackage(%r, %r)' % (self._name, self._package_name)

	def __str__(self):
		return self._name

	def __eq__(self, other):
		if not isinstance(other, OpenJDKPackage):
			return NotImplemented
		return (self._name, self._package_name) == (other._name, other._package_name)

	def __hash__(self):
		return hash((self._name, self._package_name))

	@property
	def name(self):
		return self._name

	@property
	def package_name(self):
		return self._package_name

	@property
	def devel_package_name(self):
		return self._package_name + DEVEL_SUFFIX

	@property
	def jre_name(self):
		return self._package_name.replace('java', 'jre', 1)


# Newest first; this is also the order presented to the operator.
PACKAGES = (
	OpenJDKPackage('openJDK21', 'java-21-openjdk'),
	OpenJDKPackage('openJDK17', 'java-17-openjdk'),
	OpenJDKPackage('openJDK13', 'java-13-openjdk'),
	OpenJDKPackage('openJDK11', 'java-11-openjdk'),
	OpenJDKPackage('openJDK8',  'java-1.8.0-openjdk'),
	OpenJDKPackage('openJDK7',  'java-1.7.0-openjdk'),
	OpenJDKPackage('openJDK6',  'java-1.6.0-openjdk'),
)

DEFAULT_PACKAGE = 'openJDK17'


def build_package_map(packages):
	"""Returns a dict of logical name -> package, failing on any duplicated
	name or package.
	"""
	package_map   = {}
	package_names = set()
	for package in packages:
		if package.name in package_map:
			raise OpenJDKPackageError('Duplicated OpenJDK package name: ' + package.name)
		if package.package_name in package_names:
			raise OpenJDKPackageError('Duplicated rpm package: ' + package.package_name + ' for ' + package.name)
		package_map[package.name] = package
		package_names.add(package.package_name)
	return package_map


PACKAGE_MAP = build_package_map(PACKAGES)


def get_package(name):
	"""If name is a known OpenJDK package, return it, else fail.

	@param name: logical name, eg 'openJDK17', or an OpenJDKPackage
	@rtype:      OpenJDKPackage
	"""
	if isinstance(name, OpenJDKPackage):
		name = name.name
	if name in PACKAGE_MAP:
		return PACKAGE_MAP[name]
	raise OpenJDKPackageError('Unknown OpenJDK package: ' + str(name) + '. Must be one of: ' + ', '.join(package_names()))


def package_names():
	return [package.name for package in PACKAGES]


def fill_package_items():
	"""Returns the (label, value) pairs an operator chooses a package from.
	"""
	return [(package.package_name, package.name) for package in PACKAGES]
