import logging
import os
import stat
import tempfile
import unittest
from io import StringIO
import openjdk_log
from openjdk_log import ERROR_MARKER, TaskLog


class TestTaskLog(unittest.TestCase):

	def setUp(self):
		self.stream = StringIO()
		self.log = TaskLog(stream=self.stream)

	def test_lines_are_written_in_order(self):
		self.log.println('Checking OpenJDK installation...')
		self.log.print_('no newline')
		self.log.write_output('some output')
		self.log.write_output('')
		self.assertEqual(self.stream.getvalue(), 'Checking OpenJDK installation...\nno newlinesome output\n')

	def test_error_is_marked_and_recorded(self):
		err = self.log.error('Installation of java-17-openjdk failed!', command=['sudo', 'yum'], exit_code=1)
		self.assertEqual(self.stream.getvalue(), ERROR_MARKER + ' Installation of java-17-openjdk failed!\n')
		self.assertEqual(self.log.errors, [err])
		self.assertTrue(self.log.has_errors())
		self.assertIn('exit code: 1', self.log.report())

	def test_no_colour_for_non_tty(self):
		self.assertFalse(self.log.colour)
		coloured = TaskLog(stream=self.stream, colour=True)
		coloured.error('bad')
		self.assertIn('\033[31m' + ERROR_MARKER + ' bad\033[0m', self.stream.getvalue())

	def test_empty_report(self):
		self.assertEqual(self.log.report(), '')


class TestSetupLogging(unittest.TestCase):

	def tearDown(self):
		for handler in list(openjdk_log.logger.handlers):
			openjdk_log.logger.removeHandler(handler)
			handler.close()

	def test_level(self):
		logger = openjdk_log.setup_logging('debug')
		self.assertEqual(logger.level, logging.DEBUG)
		self.assertEqual(len(logger.handlers), 1)

	def test_unknown_level(self):
		with self.assertRaises(ValueError):
			openjdk_log.setup_logging('LOUD')

	def test_logfile_is_private(self):
		fd, logfile = tempfile.mkstemp()
		os.close(fd)
		try:
			os.chmod(logfile, 0o644)
			openjdk_log.setup_logging('INFO', logfile=logfile)
			openjdk_log.log('hello')
			mode = os.stat(logfile).st_mode
			self.assertFalse(mode & (stat.S_IRGRP | stat.S_IROTH))
			for handler in openjdk_log.logger.handlers:
				handler.flush()
			with open(logfile) as f:
				self.assertIn('hello', f.read())
		finally:
			self.tearDown()
			os.remove(logfile)


if __name__ == '__main__':
	unittest.main()
