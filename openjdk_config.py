"""Layered configuration for openjdk_native.

Configs are read in order, later layers overriding earlier ones:

	- built-in defaults (default_cnf below)
	- ~/.openjdk_native/config
	- ./openjdk_native.cnf
	- any files passed in with --config
	- any --set section option value overrides
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

import configparser
import logging
import os
from io import StringIO
import openjdk_util
from openjdk_log import log
from openjdk_module import OpenJDKException


class LayerConfigParser(configparser.RawConfigParser):

	def __init__(self):
		configparser.RawConfigParser.__init__(self)
		self.layers = []

	def read(self, filenames, encoding=None):
		if not isinstance(filenames, list):
			filenames = [filenames]
		for filename in filenames:
			cp = configparser.RawConfigParser()
			cp.read(filename, encoding=encoding)
			self.layers.append((cp, filename, None))
		return configparser.RawConfigParser.read(self, filenames, encoding=encoding)

	def read_file(self, f, source=None):
		cp = configparser.RawConfigParser()
		f.seek(0)
		cp.read_file(f, source)
		self.layers.append((cp, source, f))
		f.seek(0)
		return configparser.RawConfigParser.read_file(self, f, source)

	def whereset(self, section, option):
		for cp, filename, _ in reversed(self.layers):
			if cp.has_option(section, option):
				return filename
		raise OpenJDKException('[%s]/%s was never set' % (section, option))

	def remove_section(self, *args, **kwargs):
		raise NotImplementedError('''Layer config parsers aren't directly mutable''')

	def remove_option(self, *args, **kwargs):
		raise NotImplementedError('''Layer config parsers aren't directly mutable''')


default_cnf = '''
################################################################################
# Default core config file for openjdk_native.
################################################################################

# Details relating to the target the JDK is ensured on
[target]
# How to reach the target: "bash" (this machine) or "ssh"
delivery:bash
# Host to ssh to (ssh delivery only)
host:
# User to ssh as; empty means the current user (ssh delivery only)
user:
# Port to ssh to; empty means the ssh default (ssh delivery only)
port:
# Password for the ssh login; leave empty to use keys
password:
# Seconds to wait for any one command before giving up on it
timeout:3600

# The OpenJDK to ensure
[openjdk]
# One of: openJDK21 openJDK17 openJDK13 openJDK11 openJDK8 openJDK7 openJDK6
package:openJDK17

# Information specific to the host on which openjdk_native runs.
[host]
# Log file - will be set to 0600 perms. Empty means log to stderr.
logfile:
# Log level: DEBUG, INFO, WARNING, ERROR or CRITICAL
loglevel:WARNING
'''

# Options whose values are never printed.
SECRET_OPTIONS = (('target', 'password'),)


def default_config_files():
	return [os.path.expanduser('~/.openjdk_native/config'), 'openjdk_native.cnf']


def secure_config_files(config_files):
	"""Config files may hold passwords, so correct any that are readable by
	anyone but their owner.
	"""
	for config_file in config_files:
		if not openjdk_util.is_file_secure(config_file):
			log('Correcting insecure file permissions on: ' + config_file, level=logging.WARNING)
			os.chmod(config_file, 0o600)


def load_configs(extra_configs=None, config_overrides=None):
	"""Returns a LayerConfigParser with all config layers read in.

	@param extra_configs:    list of config file names (eg from --config)
	@param config_overrides: list of (section, option, value)
	"""
	configs = [('defaults', StringIO(default_cnf))] + default_config_files()
	for config_file_name in extra_configs or []:
		run_config_file = os.path.expanduser(config_file_name)
		if not os.path.isfile(run_config_file):
			raise OpenJDKException('Did not recognise ' + run_config_file + ' as a file - do you need to touch ' + run_config_file + '?')
		configs.append(run_config_file)
	if config_overrides:
		# We don't need layers, this is a temporary configparser
		override_cp = configparser.RawConfigParser()
		for o_sec, o_key, o_val in config_overrides:
			if not override_cp.has_section(o_sec):
				override_cp.add_section(o_sec)
			override_cp.set(o_sec, o_key, o_val)
		override_fd = StringIO()
		override_cp.write(override_fd)
		override_fd.seek(0)
		configs.append(('overrides', override_fd))
	secure_config_files([c for c in configs if not isinstance(c, tuple)])
	cp = LayerConfigParser()
	for config in configs:
		if isinstance(config, tuple):
			log('Reading config: ' + config[0], level=logging.DEBUG)
			cp.read_file(config[1], source=config[0])
		else:
			log('Reading config: ' + config, level=logging.DEBUG)
			cp.read(config)
	return cp


def get_target_config(cp):
	"""Returns the [target] settings as a dict suitable for
	openjdk_target.create_target.
	"""
	target = {}
	target['delivery'] = cp.get('target', 'delivery')
	target['host']     = cp.get('target', 'host') or None
	target['user']     = cp.get('target', 'user') or None
	target['port']     = cp.get('target', 'port') or None
	target['password'] = cp.get('target', 'password') or None
	try:
		target['timeout'] = cp.getint('target', 'timeout')
	except ValueError:
		raise OpenJDKException('[target]/timeout must be a whole number of seconds, not: ' + cp.get('target', 'timeout'))
	return target


def print_config(cp, hide_password=True, history=False):
	"""Returns a string representing the config, optionally naming the layer
	that set each value.
	"""
	s = ''
	for section in cp.sections():
		s += '\n[' + section + ']\n'
		for option in cp.options(section):
			value = cp.get(section, option)
			if hide_password and (section, option) in SECRET_OPTIONS and value:
				value = '********'
			line = option + ':' + value
			if history:
				line = line.ljust(40) + ' # set in: ' + str(cp.whereset(section, option))
			s += line + '\n'
	return s
