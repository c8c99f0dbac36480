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
"""Represents and manages a pexpect object for openjdk_native's purposes.

OpenJDKPexpectSession
|
 - pexpect_child    - the spawned shell
|
 - login_stack      - prompts of the shells logged in to (eg over ssh), most
                      recent last
"""

import logging
import re
import shlex
import pexpect
import openjdk_util
from openjdk_log import log
from openjdk_module import TransportError, CommandTimeoutError, CommandInterruptedError

# Attempt to capture any starting prompt (when starting or logging in) with this regexp.
BASE_PROMPT         = '\n.*[@#$] '
# Set to the theoretical maximum to reduce risk of trouble from terminal line wraps.
PEXPECT_WINDOW_SIZE = (65535, 65535)
DEFAULT_TIMEOUT     = 3600
# sudo asking for a password, rather than the echo of a command that mentions it.
SUDO_PASSWORD_PROMPT = r'[\r\n]\[sudo\] password for [^\r\n]*:'


class OpenJDKPexpectSession(object):

	def __init__(self,
	             pexpect_session_id,
	             command,
	             args=None,
	             timeout=DEFAULT_TIMEOUT,
	             env=None,
	             echo=True,
	             encoding='utf-8',
	             delaybeforesend=0.05):
		"""spawn a child, and manage the delaybefore send setting
		"""
		self.pexpect_session_id = pexpect_session_id
		self.timeout            = timeout
		self.default_expect     = BASE_PROMPT
		self.login_stack        = []
		self.password_requested = False
		args = args or []
		self.pexpect_child      = self._spawn_child(command=command,
		                                            args=args,
		                                            timeout=timeout,
		                                            env=env,
		                                            echo=echo,
		                                            encoding=encoding,
		                                            delaybeforesend=delaybeforesend)


	def __str__(self):
		return 'OpenJDKPexpectSession(' + self.pexpect_session_id + ', login_stack=' + str(self.login_stack) + ')'


	def _spawn_child(self,
	                 command,
	                 args=None,
	                 timeout=DEFAULT_TIMEOUT,
	                 env=None,
	                 echo=True,
	                 encoding='utf-8',
	                 delaybeforesend=0.05):
		args = args or []
		log('Spawning: ' + command + ' ' + ' '.join(args), level=logging.DEBUG)
		try:
			pexpect_child = pexpect.spawn(command,
			                              args=args,
			                              timeout=timeout,
			                              env=env,
			                              echo=echo,
			                              encoding=encoding,
			                              codec_errors='replace')
		except pexpect.ExceptionPexpect as e:
			raise TransportError('Could not spawn ' + command + ': ' + str(e))
		pexpect_child.setwinsize(PEXPECT_WINDOW_SIZE[0], PEXPECT_WINDOW_SIZE[1])
		pexpect_child.delaybeforesend = delaybeforesend
		return pexpect_child


	def sendline(self, send):
		self.pexpect_child.sendline(send)


	def expect(self, expect, timeout=-1, exact=True):
		"""Handle child expects, with EOF and TIMEOUT turned into exceptions.

		Returns the index of the matched expect.
		"""
		if isinstance(expect, str):
			expect = [expect]
		if exact:
			res = self.pexpect_child.expect_exact(expect + [pexpect.TIMEOUT, pexpect.EOF], timeout=timeout)
		else:
			res = self.pexpect_child.expect(expect + [pexpect.TIMEOUT, pexpect.EOF], timeout=timeout)
		if res == len(expect):
			self._handle_timeout()
			raise CommandTimeoutError('Timed out waiting for: ' + str(expect) + ' in session ' + self.pexpect_session_id)
		if res == len(expect) + 1:
			raise CommandInterruptedError('Session ' + self.pexpect_session_id + ' ended while waiting for: ' + str(expect))
		return res


	def _handle_timeout(self):
		"""Tries to get the shell back after a command hung, so the session
		can carry on with the next command.
		"""
		log('Timed out in session ' + self.pexpect_session_id + ', sending ctrl-c', level=logging.WARNING)
		self._interrupt()


	def _interrupt(self):
		self.pexpect_child.sendcontrol('c')
		if self.default_expect == BASE_PROMPT:
			return
		if self.pexpect_child.expect_exact([self.default_expect, pexpect.TIMEOUT, pexpect.EOF], timeout=10) != 0:
			log('Could not recover prompt in session ' + self.pexpect_session_id, level=logging.WARNING)


	def setup_prompt(self, prefix='OPENJDK_PROMPT'):
		"""Use this when you've opened a new shell to set the PS1 to something
		sane, and make it the default expect.

		@param prefix: Prompt prefix.
		@return:       The new prompt.
		"""
		local_prompt = prefix + ':' + openjdk_util.random_id() + '# '
		log('Setting up prompt: ' + local_prompt, level=logging.DEBUG)
		# Split the local prompt into two parts and separate with quotes to protect against the expect matching the command rather than the output.
		# Unset the PROMPT_COMMAND as this can cause nasty surprises in the output.
		# PS1 is kept out of the environment so a shell logged in to from this one shows its own prompt.
		self.sendline(""" PS1='""" + local_prompt[:2] + "''" + local_prompt[2:] + """'; export -n PS1 2>/dev/null; unset PROMPT_COMMAND""")
		self.expect(local_prompt)
		self.default_expect = local_prompt
		self.send(' export HISTCONTROL=$HISTCONTROL:ignoredups:ignorespace')
		return local_prompt


	def send(self, send, timeout=-1):
		"""Sends a line and waits for the prompt.

		A sudo password prompt is never answered: the command is interrupted
		and password_requested is set, so the caller can treat it as failed.

		Returns what was seen before the prompt (or the password prompt).
		"""
		log('Sending: ' + send, level=logging.DEBUG)
		self.password_requested = False
		self.sendline(send)
		if self.default_expect == BASE_PROMPT:
			prompt = BASE_PROMPT
		else:
			prompt = re.escape(self.default_expect)
		res = self.expect([prompt, SUDO_PASSWORD_PROMPT], timeout=timeout, exact=False)
		before = self.pexpect_child.before
		if res == 1:
			log('Password requested by: ' + send + ' in session ' + self.pexpect_session_id + ', is sudo set up to need no password?', level=logging.WARNING)
			self.password_requested = True
			self._interrupt()
		return before


	def send_and_get_output(self, send, timeout=-1, strip=True):
		"""Returns the output of a command run. Exit is not checked.

		@param strip: Whether to strip output (defaults to True). Strips
		              whitespace and ansi terminal codes
		"""
		before = self.send(send, timeout=timeout)
		# Remove the command we ran in from the output.
		lines = re.split(r'\r\n|\n', before)
		if lines and openjdk_util.ANSI_ESCAPE.sub('', lines[0]).strip() == send.strip():
			lines = lines[1:]
		output = '\n'.join(lines)
		if strip:
			output = openjdk_util.strip_terminal_output(output)
		log('send_and_get_output returning:\n' + output, level=logging.DEBUG)
		return output


	def get_exit_value(self):
		"""Returns the exit code of the last command sent.
		"""
		#           v the space is intentional, to avoid polluting bash history.
		output = self.send(' echo EXIT_CODE:$?')
		res = openjdk_util.match_string(output, '^EXIT_CODE:([0-9][0-9]?[0-9]?)$')
		if res is None:
			raise TransportError('Could not determine exit value in session ' + self.pexpect_session_id + ', output was:\n' + output)
		log('Exit value: ' + res, level=logging.DEBUG)
		return int(res)


	def run_command(self, send, timeout=-1):
		"""Runs a command, returning (output, exit code).

		A command interrupted at a password prompt never counts as a success.
		"""
		output = self.send_and_get_output(send, timeout=timeout)
		password_requested = self.password_requested
		exit_code = self.get_exit_value()
		if password_requested and exit_code == 0:
			exit_code = 1
		return output, exit_code


	def file_exists(self, filename, directory=False):
		"""Return True if file exists on the target host, else False

		@param filename:   Filename to determine the existence of.
		@param directory:  Indicate that the file is a directory.

		@type filename:    string
		@type directory:   boolean

		@rtype: boolean
		"""
		test_type = '-d' if directory is True else '-e'
		#       v the space is intentional, to avoid polluting bash history.
		test = ' test %s %s' % (test_type, shlex.quote(filename))
		output = self.send_and_get_output(test + ' && echo FILEXIST-""FILFIN || echo FILNEXIST-""FILFIN')
		res = openjdk_util.match_string(output, '^(FILEXIST|FILNEXIST)-FILFIN$')
		if res == 'FILEXIST':
			return True
		elif res == 'FILNEXIST':
			return False
		raise TransportError('Did not see FIL(N)?EXIST in output:\n' + output)


	def login(self, command, password=None, timeout=-1):
		"""Logs in with the passed-in command, answering host key and password
		prompts. Tracks the login; use logout to log out again.
		"""
		log('Logging in with command: ' + command, level=logging.DEBUG)
		self.sendline(command)
		# r'[^t] login:' - be sure not to match 'last login:'
		send_dict = ['ontinue connecting', 'assword:', r'[^t] login:']
		password_sent = False
		while True:
			res = self.expect(send_dict + [BASE_PROMPT], timeout=timeout, exact=False)
			if res == 0:
				self.sendline('yes')
			elif res in (1, 2):
				if password is None or password_sent:
					self._interrupt()
					raise TransportError('Login failure with command: ' + command + ' (password requested)')
				self.pexpect_child.sendline(password)
				password_sent = True
			else:
				break
		previous_expect = self.default_expect
		# Our own prompt coming back means the login command exited.
		if previous_expect != BASE_PROMPT and previous_expect in str(self.pexpect_child.after):
			raise TransportError('Login failure with command: ' + command)
		self.default_expect = BASE_PROMPT
		prompt = self.setup_prompt()
		self.login_stack.append(previous_expect)
		log('Login stack after login: ' + str(self.login_stack), level=logging.DEBUG)
		return prompt


	def logout(self, command='exit'):
		"""Logs out of the most recent login.
		"""
		if not self.login_stack:
			raise TransportError('Logout called without corresponding login')
		self.default_expect = self.login_stack.pop()
		self.send(command)


	def close(self):
		"""Logs out of everything and terminates the child.
		"""
		try:
			while self.login_stack:
				self.logout()
		except TransportError:
			log('Could not log out cleanly from session ' + self.pexpect_session_id, level=logging.WARNING)
		if self.pexpect_child.isalive():
			self.pexpect_child.sendline('exit')
		self.pexpect_child.close(force=True)
