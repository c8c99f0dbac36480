import os
import tempfile
import unittest
import openjdk_util


class TestMatchString(unittest.TestCase):

	def test_first_group_of_first_matching_line(self):
		output = ' echo EXIT_CODE:$?\r\nEXIT_CODE:127\r\n'
		self.assertEqual(openjdk_util.match_string(output, '^EXIT_CODE:([0-9][0-9]?[0-9]?)$'), '127')

	def test_no_groups_and_no_match(self):
		self.assertTrue(openjdk_util.match_string('a\nFILFIN\n', '^FILFIN$'))
		self.assertIsNone(openjdk_util.match_string('a\nb', '^c$'))
		self.assertIsNone(openjdk_util.match_string(None, '^c$'))

	def test_bad_regexp(self):
		with self.assertRaises(ValueError):
			openjdk_util.match_string('a', '(')

	def test_terminal_codes_ignored(self):
		self.assertEqual(openjdk_util.match_string('\x1b[?2004lEXIT_CODE:0', '^EXIT_CODE:([0-9]+)$'), '0')


class TestUtil(unittest.TestCase):

	def test_strip_terminal_output(self):
		self.assertEqual(openjdk_util.strip_terminal_output('  \x1b[01;31mred\x1b[0m\r\nline\r\n'), 'red\nline')

	def test_strip_trailing_bracketed_paste_code(self):
		self.assertEqual(openjdk_util.strip_terminal_output('3166\r\n\x1b[?2004l'), '3166')
		self.assertEqual(openjdk_util.strip_terminal_output('\x1b[?2004l\rok\r\n'), 'ok')

	def test_random_id(self):
		self.assertEqual(len(openjdk_util.random_id()), 8)
		self.assertEqual(len(openjdk_util.random_id(size=3)), 3)

	def test_is_file_secure(self):
		fd, path = tempfile.mkstemp()
		os.close(fd)
		try:
			os.chmod(path, 0o600)
			self.assertTrue(openjdk_util.is_file_secure(path))
			os.chmod(path, 0o640)
			self.assertFalse(openjdk_util.is_file_secure(path))
		finally:
			os.remove(path)
		self.assertTrue(openjdk_util.is_file_secure(path))


if __name__ == '__main__':
	unittest.main()
