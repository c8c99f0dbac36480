import unittest
import openjdk_package
from openjdk_module import OpenJDKPackageError
from openjdk_package import OpenJDKPackage


class TestOpenJDKPackages(unittest.TestCase):

	def test_all_seven_versions(self):
		self.assertEqual(openjdk_package.package_names(),
		                 ['openJDK21', 'openJDK17', 'openJDK13', 'openJDK11', 'openJDK8', 'openJDK7', 'openJDK6'])

	def test_derived_names(self):
		for package in openjdk_package.PACKAGES:
			self.assertEqual(package.devel_package_name, package.package_name + '-devel')
			self.assertTrue(package.package_name.startswith('java-'))
			self.assertEqual(package.jre_name, 'jre-' + package.package_name[len('java-'):])

	def test_jre_name_rewrites_only_leading_java(self):
		package = OpenJDKPackage('odd', 'java-java-openjdk')
		self.assertEqual(package.jre_name, 'jre-java-openjdk')

	def test_packages_are_immutable(self):
		package = openjdk_package.get_package('openJDK11')
		with self.assertRaises(AttributeError):
			package.package_name = 'java-12-openjdk'
		self.assertEqual(package.package_name, 'java-11-openjdk')

	def test_get_package(self):
		package = openjdk_package.get_package('openJDK8')
		self.assertEqual(package.package_name, 'java-1.8.0-openjdk')
		self.assertIs(openjdk_package.get_package(package), package)
		with self.assertRaises(OpenJDKPackageError):
			openjdk_package.get_package('openJDK9')

	def test_duplicate_names_rejected(self):
		with self.assertRaises(OpenJDKPackageError):
			openjdk_package.build_package_map([OpenJDKPackage('openJDK8', 'java-1.8.0-openjdk'),
			                                   OpenJDKPackage('openJDK8', 'java-8-openjdk')])
		with self.assertRaises(OpenJDKPackageError):
			openjdk_package.build_package_map([OpenJDKPackage('openJDK8', 'java-1.8.0-openjdk'),
			                                   OpenJDKPackage('openJDK8b', 'java-1.8.0-openjdk')])

	def test_fill_package_items(self):
		items = openjdk_package.fill_package_items()
		self.assertEqual(len(items), 7)
		self.assertEqual(items[0], ('java-21-openjdk', 'openJDK21'))
		self.assertEqual(items[-1], ('java-1.6.0-openjdk', 'openJDK6'))

	def test_default_package_is_known(self):
		self.assertIn(openjdk_package.DEFAULT_PACKAGE, openjdk_package.PACKAGE_MAP)


if __name__ == '__main__':
	unittest.main()
