"""openjdk_native ensures a native OpenJDK package is installed on a
RedHat-like machine and selected as the system java.
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

import argparse
import getpass
import logging
import sys
import texttable
import openjdk_config
import openjdk_installer
import openjdk_package
import openjdk_sudoers
import openjdk_target
from openjdk_log import ERROR_MARKER, TaskLog, log, setup_logging
from openjdk_module import OpenJDKException, UnsupportedPlatformError

openjdk_native_version = '1.0.0'

# These are in order of their creation
ACTIONS = ['install', 'list_packages', 'sudoers', 'list_configs', 'version']


def parse_args(argv=None):
	"""Responsible for parsing arguments.

	install is the default if there is no action specified and we've not
	asked for help.
	"""
	argv = list(sys.argv[1:] if argv is None else argv)
	if len(argv) == 0 or (argv[0] not in ACTIONS and '-h' not in argv and '--help' not in argv):
		argv.insert(0, 'install')

	parser = argparse.ArgumentParser(description='openjdk_native - ensure a native OpenJDK on a RedHat-like machine.\n\nTo view help for a specific subcommand, type openjdk_native <subcommand> -h', prog='openjdk_native')
	subparsers = parser.add_subparsers(dest='action', help='''Action to perform - install=ensure the OpenJDK on the target, list_packages=show the OpenJDK packages available, sudoers=show the sudoers setup the target needs, list_configs=show configuration as read in. Defaults to 'install'.''')

	sub_parsers = dict()
	for action in ACTIONS:
		sub_parsers[action] = subparsers.add_parser(action)

	sub_parsers['install'].add_argument('--package', help='OpenJDK to ensure, one of: ' + ', '.join(openjdk_package.package_names()), default=None, choices=openjdk_package.package_names())
	sub_parsers['install'].add_argument('--delivery', help='How to reach the target: "bash" (this machine) or "ssh"', default=None, choices=openjdk_target.DELIVERY_METHODS)
	sub_parsers['install'].add_argument('--host', help='Host to ssh to', default=None)
	sub_parsers['install'].add_argument('--user', help='User to ssh as', default=None)
	sub_parsers['install'].add_argument('--port', help='Port to ssh to', default=None)
	sub_parsers['install'].add_argument('--ask_password', help='Prompt for the ssh password', default=False, const=True, action='store_const')

	sub_parsers['sudoers'].add_argument('--user', help='User the installer runs commands as (default: current user)', default=None)

	sub_parsers['list_configs'].add_argument('--history', help='Show which config layer set each value', default=False, const=True, action='store_const')

	for action in ('install', 'list_configs'):
		sub_parsers[action].add_argument('--config', help='Config file for setup config. Must be with perms 0600. Multiple arguments allowed; config files considered in order.', default=[], action='append')
		sub_parsers[action].add_argument('-s', '--set', help='Override a config item, e.g. "-s target host myhost". Multiple arguments allowed.', default=[], action='append', nargs=3, metavar=('SEC', 'KEY', 'VAL'))
	for action in ACTIONS:
		sub_parsers[action].add_argument('-l', '--log', default=None, help='Log level (DEBUG, INFO, WARNING (default), ERROR, CRITICAL)', choices=('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL', 'debug', 'info', 'warning', 'error', 'critical'))
		sub_parsers[action].add_argument('--logfile', default=None, help='Log output to this file')

	return parser.parse_args(argv)


def handle_list_packages():
	table_list = [['Name', 'Package', 'Devel package', 'JRE']]
	for package_name, name in openjdk_package.fill_package_items():
		package = openjdk_package.get_package(name)
		table_list.append([name, package_name, package.devel_package_name, package.jre_name])
	table = texttable.Texttable()
	table.add_rows(table_list)
	# Base length of table on length of strings
	colwidths = [10] * len(table_list[0])
	for item in table_list:
		for n in range(0, len(item)):
			if len(str(item[n])) > colwidths[n]:
				colwidths[n] = len(str(item[n]))
	table.set_cols_width(colwidths)
	return table.draw()


def handle_install(args, cp, stream=None):
	"""Connects to the target and ensures the configured OpenJDK.

	Returns the exit code for the process.
	"""
	target_cfg = openjdk_config.get_target_config(cp)
	for key in ('delivery', 'host', 'user', 'port'):
		if getattr(args, key) is not None:
			target_cfg[key] = getattr(args, key)
	if args.ask_password:
		target_cfg['password'] = getpass.getpass('Password for ' + str(target_cfg['host']) + ': ')
	package = args.package or cp.get('openjdk', 'package')
	task_log = TaskLog(stream=stream)
	try:
		installer = openjdk_installer.OpenJDKInstaller(package)
		with openjdk_target.create_target(**target_cfg) as target:
			task_log.println(str(installer) + ': ' + installer.description + ' on ' + str(target))
			java_bin = installer.perform_installation(target, task_log)
	except UnsupportedPlatformError as e:
		task_log.println(ERROR_MARKER + ' ' + str(e))
		return 1
	except OpenJDKException as e:
		task_log.println(ERROR_MARKER + ' ' + str(e))
		log('Install failed: ' + str(e), level=logging.CRITICAL)
		return 1
	task_log.println('OpenJDK binaries are in: ' + java_bin)
	if task_log.has_errors():
		log(task_log.report(), level=logging.WARNING)
	return 0


def main(argv=None):
	"""Main openjdk_native function.

	Handles the configured actions:

		- install       - ensure the OpenJDK on the target
		- list_packages - output the known OpenJDK packages
		- sudoers       - output the sudoers setup the target needs
		- list_configs  - output computed configuration
		- version       - output the version
	"""
	args = parse_args(argv)
	if args.action == 'version':
		print('openjdk_native version: ' + openjdk_native_version)
		return 0
	cp = None
	try:
		if args.action in ('install', 'list_configs'):
			cp = openjdk_config.load_configs(extra_configs=args.config, config_overrides=args.set)
		loglevel = args.log or (cp.get('host', 'loglevel') if cp else 'WARNING')
		logfile  = args.logfile or (cp.get('host', 'logfile') if cp else '')
		setup_logging(loglevel=loglevel, logfile=logfile)
		if args.action == 'list_packages':
			print(handle_list_packages())
		elif args.action == 'sudoers':
			print(openjdk_sudoers.render_sudoers(args.user or getpass.getuser()))
		elif args.action == 'list_configs':
			print(openjdk_config.print_config(cp, history=args.history))
		elif args.action == 'install':
			return handle_install(args, cp)
	except (OpenJDKException, ValueError) as e:
		print(str(e), file=sys.stderr)
		return 1
	return 0


if __name__ == '__main__':
	try:
		sys.exit(main())
	except KeyboardInterrupt:
		print('Keyboard interrupt caught, exiting with status 1')
		sys.exit(1)
