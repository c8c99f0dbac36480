import os
import tempfile
import unittest
from io import StringIO
from unittest import mock
import openjdk_config
import openjdk_log
import openjdk_native
from openjdk_fakes import FakeTarget
from openjdk_log import ERROR_MARKER


class TestParseArgs(unittest.TestCase):

	def test_install_is_default(self):
		self.assertEqual(openjdk_native.parse_args([]).action, 'install')
		args = openjdk_native.parse_args(['--package', 'openJDK8', '--delivery', 'ssh', '--host', 'rhel8'])
		self.assertEqual(args.action, 'install')
		self.assertEqual(args.package, 'openJDK8')
		self.assertEqual(args.delivery, 'ssh')
		self.assertEqual(args.host, 'rhel8')

	def test_sets(self):
		args = openjdk_native.parse_args(['install', '-s', 'target', 'host', 'a', '-s', 'target', 'user', 'b'])
		self.assertEqual(args.set, [['target', 'host', 'a'], ['target', 'user', 'b']])

	def test_unknown_package_rejected(self):
		with mock.patch('sys.stderr', new=StringIO()):
			with self.assertRaises(SystemExit):
				openjdk_native.parse_args(['install', '--package', 'openJDK99'])


class TestActions(unittest.TestCase):

	def setUp(self):
		self.tmpdir = tempfile.mkdtemp()
		self.owd = os.getcwd()
		os.chdir(self.tmpdir)

	def tearDown(self):
		os.chdir(self.owd)
		os.rmdir(self.tmpdir)
		for handler in list(openjdk_log.logger.handlers):
			openjdk_log.logger.removeHandler(handler)

	def test_version(self):
		with mock.patch('sys.stdout', new=StringIO()) as out:
			self.assertEqual(openjdk_native.main(['version']), 0)
		self.assertIn(openjdk_native.openjdk_native_version, out.getvalue())

	def test_list_packages(self):
		table = openjdk_native.handle_list_packages()
		for name in ('openJDK21', 'java-1.8.0-openjdk-devel', 'jre-1.6.0-openjdk'):
			self.assertIn(name, table)
		with mock.patch('sys.stdout', new=StringIO()) as out:
			self.assertEqual(openjdk_native.main(['list_packages']), 0)
		self.assertIn('java-17-openjdk-devel', out.getvalue())

	def test_sudoers(self):
		with mock.patch('sys.stdout', new=StringIO()) as out:
			self.assertEqual(openjdk_native.main(['sudoers', '--user', 'jenkins']), 0)
		self.assertIn('Defaults:jenkins !requiretty', out.getvalue())

	def test_list_configs(self):
		with mock.patch('sys.stdout', new=StringIO()) as out:
			self.assertEqual(openjdk_native.main(['list_configs', '--history', '-s', 'openjdk', 'package', 'openJDK11']), 0)
		self.assertIn('package:openJDK11', out.getvalue())

	def install(self, target, argv):
		args = openjdk_native.parse_args(argv)
		cp = openjdk_config.load_configs(config_overrides=args.set)
		stream = StringIO()
		with mock.patch('openjdk_target.create_target', return_value=target) as create_target:
			res = openjdk_native.handle_install(args, cp, stream=stream)
		return res, stream.getvalue(), create_target

	def test_install(self):
		target = FakeTarget({'rpm -q java-11-openjdk-devel': 1})
		res, output, create_target = self.install(target, ['install', '-s', 'openjdk', 'package', 'openJDK11', '--delivery', 'ssh', '--host', 'rhel8'])
		self.assertEqual(res, 0)
		self.assertIn('OpenJDK binaries are in: /usr/bin', output)
		self.assertTrue(output.startswith('OpenJDK installer: Installs java-11-openjdk via yum and switches to it via alternatives on fake_target\n'))
		self.assertIn(['sudo', 'yum', '-y', 'install', 'java-11-openjdk-devel'], target.commands)
		self.assertTrue(target.closed)
		kwargs = create_target.call_args[1]
		self.assertEqual(kwargs['delivery'], 'ssh')
		self.assertEqual(kwargs['host'], 'rhel8')

	def test_install_package_argument_beats_config(self):
		target = FakeTarget()
		res, _, _ = self.install(target, ['install', '--package', 'openJDK21', '-s', 'openjdk', 'package', 'openJDK11'])
		self.assertEqual(res, 0)
		self.assertEqual(target.commands[0], ['rpm', '-q', 'java-21-openjdk'])

	def test_install_errors_do_not_fail_the_run(self):
		target = FakeTarget({'rpm -q java-17-openjdk': 1, 'sudo yum -y install java-17-openjdk': 1})
		res, output, _ = self.install(target, ['install'])
		self.assertEqual(res, 0)
		self.assertIn(ERROR_MARKER + ' Installation of java-17-openjdk failed!', output)

	def test_install_unsupported_platform(self):
		target = FakeTarget(files=())
		res, output, _ = self.install(target, ['install'])
		self.assertEqual(res, 1)
		self.assertIn(ERROR_MARKER, output)
		self.assertIn('RedHat-like', output)
		self.assertEqual(target.commands, [])
		self.assertTrue(target.closed)


if __name__ == '__main__':
	unittest.main()
