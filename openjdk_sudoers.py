"""Generates the sudoers snippet a target needs before openjdk_native can
install and switch OpenJDK on it without a password.
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

import re
import jinja2
from openjdk_module import OpenJDKException

# The commands the installer runs via sudo.
SUDO_COMMANDS = ('/usr/bin/rpm', '/usr/bin/yum', '/usr/sbin/alternatives')

SUDOERS_TEMPLATE = """# Generated by openjdk_native. Install with: visudo -f /etc/sudoers.d/{{ file_name }}
# sudo must not require a tty, as commands are sent over a non-login session.
Defaults:{{ user }} !requiretty
User_Alias {{ user_alias }} = {{ user }}
Cmnd_Alias {{ cmnd_alias }} = {{ commands|join(', ') }}
{{ user_alias }} ALL = NOPASSWD: {{ cmnd_alias }}
"""


def render_sudoers(user, user_alias='OPENJDK_USERS', cmnd_alias='OPENJDK', commands=SUDO_COMMANDS):
	"""Returns the sudoers snippet granting user passwordless rights to the
	commands the installer runs.
	"""
	if not user or not re.match(r'^[a-z_][a-zA-Z0-9_.-]*\$?$', user):
		raise OpenJDKException('Not a valid user name for sudoers: ' + str(user))
	template = jinja2.Template(SUDOERS_TEMPLATE)
	return template.render(user=user,
	                       user_alias=user_alias,
	                       cmnd_alias=cmnd_alias,
	                       commands=commands,
	                       file_name='openjdk_native')
