"""Installer of native OpenJDK packages for RedHat-like distros.

Switches to the required OpenJDK version via Linux alternatives. If the
required OpenJDK is not installed, tries to install it via yum.

Alternatives and yum are run via sudo, therefore an appropriate sudoers setup
is required on the target (including switching off the tty requirement). See
openjdk_sudoers for a generator; example::

	Defaults:test !requiretty
	User_Alias OPENJDK_USERS = test
	Cmnd_Alias OPENJDK = /usr/bin/rpm, /usr/bin/yum, /usr/sbin/alternatives
	OPENJDK_USERS ALL = NOPASSWD: OPENJDK
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

import openjdk_package
from openjdk_log import TaskLog, log_exception
from openjdk_module import ToolInstaller, TransportError, UnsupportedPlatformError

OPENJDK_HOME_PREFIX = '/usr/lib/jvm/'
OPENJDK_HOME_BIN    = '/bin/java'
OPENJDK_BIN         = '/usr/bin'
RH_RELEASE_FILE     = '/etc/redhat-release'

# A failed query, install or switch is reported in the log and the install
# carries on to the next step. Only an unsupported platform aborts.
CONTINUE_ON_COMMAND_FAILURE = True


def query_command(package_name):
	return ['rpm', '-q', package_name]


def install_command(package_name):
	return ['sudo', 'yum', '-y', 'install', package_name]


def switch_command(package_name):
	# $(rpm -q ...) resolves to the installed version, which names its dir under /usr/lib/jvm.
	return ['sudo', 'alternatives', '--set', 'java', OPENJDK_HOME_PREFIX + '$(rpm -q ' + package_name + ')' + OPENJDK_HOME_BIN]


class OpenJDKInstaller(ToolInstaller):
	"""Ensures an OpenJDK package and its devel package are installed on an
	RPM-based target, and that the system java alternative points at it.
	"""

	def __init__(self, package=openjdk_package.DEFAULT_PACKAGE, continue_on_command_failure=CONTINUE_ON_COMMAND_FAILURE):
		self.openjdk_package = openjdk_package.get_package(package)
		self.continue_on_command_failure = continue_on_command_failure
		super(OpenJDKInstaller, self).__init__('OpenJDK installer', description='Installs ' + self.openjdk_package.package_name + ' via yum and switches to it via alternatives')


	def perform_installation(self, target, log=None):
		"""Runs the install steps in order, returning the java bin directory.

		Raises UnsupportedPlatformError if the target is not RedHat-like;
		any other failure is written to the log and does not stop the install.
		"""
		if target is None:
			raise ValueError('must pass non-null target')
		log = log or TaskLog()
		self.check_platform(target, log)
		if not self.is_installed(target, log, devel=False):
			self.install_via_yum(target, log, devel=False)
		if not self.is_installed(target, log, devel=True):
			self.install_via_yum(target, log, devel=True)
		self.switch_alternatives(target, log)
		return OPENJDK_BIN


	def check_platform(self, target, log):
		log.println('Checking ' + str(target) + ' is a RedHat-like distro...')
		try:
			exists = target.file_exists(RH_RELEASE_FILE)
		except TransportError:
			log_exception('Could not check for ' + RH_RELEASE_FILE + ' on ' + str(target))
			exists = False
		if not exists:
			raise UnsupportedPlatformError('Target ' + str(target) + ' doesn\'t seem to be running on a RedHat-like distro (no ' + RH_RELEASE_FILE + ')')


	def is_installed(self, target, log, devel=False):
		"""Returns True if rpm reports the (devel) package installed.
		"""
		package_name = self._package_name(devel)
		log.println('Checking OpenJDK installation (' + package_name + ')...')
		exit_code = self._run(target, log, query_command(package_name))
		return exit_code == 0


	def install_via_yum(self, target, log, devel=False):
		package_name = self._package_name(devel)
		log.println(package_name + ' not installed, trying to install via yum ...')
		exit_code = self._run(target, log, install_command(package_name))
		if exit_code != 0:
			self._command_failed(log.error('Installation of ' + package_name + ' failed!', command=install_command(package_name), exit_code=exit_code))
		return exit_code == 0


	def switch_alternatives(self, target, log):
		package_name = self.openjdk_package.package_name
		log.println('Switching to ' + package_name + ' using alternatives ...')
		exit_code = self._run(target, log, switch_command(package_name))
		if exit_code != 0:
			self._command_failed(log.error('Switching OpenJDK via alternatives to ' + package_name + ' failed! ' + OPENJDK_BIN + ' may not exist or point to a different java version!', command=switch_command(package_name), exit_code=exit_code))
		return exit_code == 0


	def _command_failed(self, err):
		if not self.continue_on_command_failure:
			raise err


	def _package_name(self, devel):
		if devel:
			return self.openjdk_package.devel_package_name
		return self.openjdk_package.package_name


	def _run(self, target, log, argv):
		"""Runs argv on the target, relaying its output to the log.

		Returns the exit code, or None if the transport failed.
		"""
		try:
			result = target.run(argv)
		except TransportError:
			log_exception('Running ' + ' '.join(argv) + ' on ' + str(target) + ' failed')
			return None
		log.write_output(result.output)
		return result.exit_code


def ensure(target, package, log=None):
	"""Ensures package (an OpenJDKPackage or its name) is installed on target
	and selected as the system java. Returns the java bin directory.
	"""
	return OpenJDKInstaller(package).perform_installation(target, log=log)
