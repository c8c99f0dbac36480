"""Abstract class that defines how an openjdk_native tool installer should be
written, plus the exceptions raised by installers and targets.
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

from abc import ABCMeta, abstractmethod


class OpenJDKException(Exception):
	"""Root of all openjdk_native errors.
	"""
	pass


class OpenJDKPackageError(OpenJDKException):
	"""Unknown or inconsistent package definition.
	"""
	pass


class UnsupportedPlatformError(OpenJDKException):
	"""The target is not an RPM-based (RedHat-like) distribution.
	"""
	pass


class CommandFailedError(OpenJDKException):
	"""A query, install or switch command returned non-zero.

	Installers record these rather than raise them.
	"""

	def __init__(self, msg, command=None, exit_code=None):
		super(CommandFailedError, self).__init__(msg)
		self.command   = command
		self.exit_code = exit_code


class TransportError(OpenJDKException):
	"""The channel to the target failed while running a command.
	"""
	pass


class CommandTimeoutError(TransportError):
	pass


class CommandInterruptedError(TransportError):
	pass



class ToolInstaller(metaclass=ABCMeta):
	"""Class that defines what a tool installer must implement.

	An installer is handed a target (see openjdk_target.Target) and a
	transcript (see openjdk_log.TaskLog), and returns the directory on the
	target in which the tool's binaries can be found.
	"""

	def __init__(self, label, description=''):
		"""Constructor.
		Checks types for safety.
		"""
		if not isinstance(label, str):
			err = str(label) + '\'s label is not a string'
			raise OpenJDKException(err)
		self.label       = label
		self.description = description


	def __str__(self):
		return self.label


	@abstractmethod
	def perform_installation(self, target, log):
		"""Ensures the tool is installed on the target.

		Returns the path of the tool's binary directory on the target.

		Required.
		"""
		pass
