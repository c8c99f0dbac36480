import os
import stat
import tempfile
import unittest
import openjdk_config
from openjdk_module import OpenJDKException


class TestLoadConfigs(unittest.TestCase):

	def setUp(self):
		self.tmpdir = tempfile.mkdtemp()
		self.owd = os.getcwd()
		# Keep any ./openjdk_native.cnf out of the way.
		os.chdir(self.tmpdir)

	def tearDown(self):
		os.chdir(self.owd)
		for name in os.listdir(self.tmpdir):
			os.remove(os.path.join(self.tmpdir, name))
		os.rmdir(self.tmpdir)

	def write_config(self, text, mode=0o600):
		path = os.path.join(self.tmpdir, 'extra.cnf')
		with open(path, 'w') as f:
			f.write(text)
		os.chmod(path, mode)
		return path

	def test_defaults(self):
		cp = openjdk_config.load_configs()
		self.assertEqual(cp.get('openjdk', 'package'), 'openJDK17')
		self.assertEqual(cp.get('target', 'delivery'), 'bash')
		self.assertEqual(cp.whereset('openjdk', 'package'), 'defaults')

	def test_layers_override_in_order(self):
		path = self.write_config('[target]\ndelivery:ssh\nhost:firsthost\n')
		cp = openjdk_config.load_configs(extra_configs=[path],
		                                 config_overrides=[('target', 'host', 'otherhost')])
		self.assertEqual(cp.get('target', 'delivery'), 'ssh')
		self.assertEqual(cp.whereset('target', 'delivery'), path)
		self.assertEqual(cp.get('target', 'host'), 'otherhost')
		self.assertEqual(cp.whereset('target', 'host'), 'overrides')

	def test_insecure_config_is_corrected(self):
		path = self.write_config('[target]\npassword:secret\n', mode=0o644)
		openjdk_config.load_configs(extra_configs=[path])
		mode = os.stat(path).st_mode
		self.assertFalse(mode & (stat.S_IRGRP | stat.S_IROTH))

	def test_missing_config(self):
		with self.assertRaises(OpenJDKException):
			openjdk_config.load_configs(extra_configs=[os.path.join(self.tmpdir, 'nothere.cnf')])

	def test_layers_are_not_mutable(self):
		cp = openjdk_config.load_configs()
		with self.assertRaises(NotImplementedError):
			cp.remove_section('target')

	def test_get_target_config(self):
		cp = openjdk_config.load_configs(config_overrides=[('target', 'delivery', 'ssh'),
		                                                   ('target', 'host', 'rhel8'),
		                                                   ('target', 'port', '2222'),
		                                                   ('target', 'timeout', '60')])
		target = openjdk_config.get_target_config(cp)
		self.assertEqual(target, {'delivery': 'ssh',
		                          'host': 'rhel8',
		                          'user': None,
		                          'port': '2222',
		                          'password': None,
		                          'timeout': 60})

	def test_bad_timeout(self):
		cp = openjdk_config.load_configs(config_overrides=[('target', 'timeout', 'soon')])
		with self.assertRaises(OpenJDKException):
			openjdk_config.get_target_config(cp)

	def test_print_config_hides_password(self):
		cp = openjdk_config.load_configs(config_overrides=[('target', 'password', 'hunter2')])
		printed = openjdk_config.print_config(cp, history=True)
		self.assertNotIn('hunter2', printed)
		self.assertIn('password:********', printed)
		self.assertIn('# set in: overrides', printed)
		self.assertIn('[openjdk]', printed)


if __name__ == '__main__':
	unittest.main()
