"""Targets: the machines an installer runs commands on.

Nomenclature:
    - Host machine:   Machine on which openjdk_native is run.
    - Target:         Machine on which the JDK is to be ensured (the host
                      itself over bash, or a remote machine over ssh).
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
from abc import ABCMeta, abstractmethod
from openjdk_log import log
from openjdk_module import OpenJDKException
from openjdk_pexpect import OpenJDKPexpectSession, DEFAULT_TIMEOUT

BASH_COMMAND = '/bin/bash'
BASH_ARGS    = ['--noprofile', '--norc', '--noediting']
DELIVERY_METHODS = ('bash', 'ssh')


class ExecutionResult(object):
	"""Exit code and captured output of a command run on a target.
	"""

	def __init__(self, exit_code, output=''):
		self.exit_code = exit_code
		self.output    = output

	def __repr__(self):
		return 'ExecutionResult(exit_code=%r, output=%r)' % (self.exit_code, self.output)

	@property
	def succeeded(self):
		return self.exit_code == 0


class Target(metaclass=ABCMeta):
	"""Anything that can run a command and test for a file.
	"""

	name = 'target'

	@abstractmethod
	def run(self, argv):
		"""Runs argv to completion, returning an ExecutionResult.

		May raise openjdk_module.TransportError.
		"""
		pass

	@abstractmethod
	def file_exists(self, path):
		pass

	def close(self):
		pass

	def __enter__(self):
		return self

	def __exit__(self, exc_type, exc_value, tb):
		self.close()
		return False

	def __str__(self):
		return self.name


class PexpectTarget(Target):
	"""A target driven through an interactive shell.

	The argv is joined into a single line for the shell, so shell substitution
	in an argument happens on the target.
	"""

	def __init__(self, name, timeout=DEFAULT_TIMEOUT):
		self.name    = name
		self.timeout = timeout
		self.session = OpenJDKPexpectSession('target_child',
		                                     BASH_COMMAND,
		                                     args=BASH_ARGS,
		                                     timeout=timeout)
		try:
			self.session.setup_prompt()
		except OpenJDKException:
			self.session.close()
			raise

	def run(self, argv):
		#      v the space is intentional, to avoid polluting bash history.
		send = ' ' + ' '.join(argv)
		output, exit_code = self.session.run_command(send)
		log('Command: ' + send + ' on ' + self.name + ' returned: ' + str(exit_code), level=logging.DEBUG)
		return ExecutionResult(exit_code, output)

	def file_exists(self, path):
		return self.session.file_exists(path)

	def close(self):
		self.session.close()


class BashTarget(PexpectTarget):
	"""Runs commands on the host machine, in a bash shell.
	"""

	def __init__(self, timeout=DEFAULT_TIMEOUT):
		super(BashTarget, self).__init__('localhost', timeout=timeout)


class SshTarget(PexpectTarget):
	"""Runs commands on a remote machine, in a shell logged in to over ssh.
	"""

	def __init__(self, host, user=None, port=None, password=None, timeout=DEFAULT_TIMEOUT):
		if not host:
			raise OpenJDKException('ssh delivery needs a host')
		super(SshTarget, self).__init__(host, timeout=timeout)
		self.user = user
		self.port = port
		command = 'ssh'
		if port:
			command += ' -p ' + str(port)
		command += ' ' + (user + '@' + host if user else host)
		try:
			self.session.login(command, password=password)
		except OpenJDKException:
			self.session.close()
			raise


def create_target(delivery='bash', host=None, user=None, port=None, password=None, timeout=DEFAULT_TIMEOUT):
	"""Returns a connected target for the given delivery method.
	"""
	if delivery == 'bash':
		return BashTarget(timeout=timeout)
	elif delivery == 'ssh':
		return SshTarget(host, user=user, port=port, password=password, timeout=timeout)
	raise OpenJDKException('Unknown delivery method: ' + str(delivery) + '. Must be one of: ' + ', '.join(DELIVERY_METHODS))
