"""Logging for openjdk_native.

Two channels exist:

	- the diagnostic log, which is python logging under the 'openjdk_native'
	  logger, set up once by the command line;
	- the task log (TaskLog), the ordered transcript of checks, command output
	  and annotated errors that is shared with whatever invoked the install.
"""

# The MIT License (MIT)
#
# Copyright (C) 2014 OpenBet Limited
#
# Permission is hereby granted, free of charge, to any person obtaining a copy of
# this software and associated documentation files (the "Software"), to deal in
# the Software without restriction, including without limitation the rights to
# use, copy, modify, merge, publish, distribute, sublicense, and/or sell copies
# of the Software, and to permit persons to whom the Software is furnished to do
# so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# ITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL
# THE AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

import logging
import os
import sys
import traceback
import openjdk_util
from openjdk_module import CommandFailedError

LOGGER_NAME  = 'openjdk_native'
ERROR_MARKER = '[OpenJDK ERROR]'
LOG_FORMAT   = '%(asctime)s %(levelname)s %(name)s: %(message)s'

logger = logging.getLogger(LOGGER_NAME)


def setup_logging(loglevel='WARNING', logfile=''):
	"""Configures the diagnostic log.

	@param loglevel: Level name, eg 'DEBUG', 'INFO', 'WARNING'.
	@param logfile:  If set, log there (set to 0600 perms) rather than stderr.
	"""
	level = logging.getLevelName(str(loglevel).upper())
	if not isinstance(level, int):
		raise ValueError('Unknown log level: ' + str(loglevel))
	if logfile:
		handler = logging.FileHandler(logfile)
		os.chmod(logfile, 0o600)
	else:
		handler = logging.StreamHandler(sys.stderr)
	handler.setFormatter(logging.Formatter(LOG_FORMAT))
	for old_handler in list(logger.handlers):
		logger.removeHandler(old_handler)
	logger.addHandler(handler)
	logger.setLevel(level)
	return logger


def log(msg, level=logging.INFO):
	logger.log(level, msg)


def log_exception(msg, exc_info=None):
	"""Logs a swallowed exception: the message at warning level, the stack
	trace at debug level.
	"""
	exc_info = exc_info or sys.exc_info()
	log(msg, level=logging.WARNING)
	if exc_info[0] is not None:
		stack_trace = ''
		for line in traceback.format_exception(*exc_info):
			stack_trace += line
		log('Stacktrace:\n' + stack_trace, level=logging.DEBUG)


class TaskLog(object):
	"""The transcript of an install, written in order to a single stream.

	Error lines carry ERROR_MARKER so they can be grepped for; every error is
	also kept in self.errors as a CommandFailedError.
	"""

	def __init__(self, stream=None, colour=None):
		self.stream = stream or sys.stdout
		if colour is None:
			isatty = getattr(self.stream, 'isatty', None)
			colour = bool(isatty and isatty())
		self.colour = colour
		self.errors = []


	def print_(self, msg):
		"""Writes msg without a trailing newline.
		"""
		self.stream.write(msg)
		self.stream.flush()


	def println(self, msg=''):
		self.print_(msg + '\n')
		log(msg, level=logging.DEBUG)


	def write_output(self, output):
		"""Relays the output of a command.
		"""
		if output:
			self.print_(output if output.endswith('\n') else output + '\n')


	def error(self, msg, command=None, exit_code=None):
		"""Writes an annotated error line and records the failure.
		"""
		err = CommandFailedError(msg, command=command, exit_code=exit_code)
		self.errors.append(err)
		line = ERROR_MARKER + ' ' + msg
		if self.colour:
			line = openjdk_util.colorise('31', line)
		self.println(line)
		log(line, level=logging.ERROR)
		return err


	def has_errors(self):
		return len(self.errors) > 0


	def report(self):
		"""Returns a summary of the errors seen, or '' if there were none.
		"""
		if not self.errors:
			return ''
		msg = str(len(self.errors)) + ' error(s) seen:'
		for err in self.errors:
			msg += '\n\t' + str(err)
			if err.exit_code is not None:
				msg += ' (exit code: ' + str(err.exit_code) + ')'
		return msg
