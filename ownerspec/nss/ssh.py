# Copyright 2013 Isotoma Limited
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import getpass
import io
import logging
import select
import shlex
import socket
import time
from urllib.parse import unquote

import gevent
import paramiko
from paramiko.ssh_exception import SSHException
from paramiko.rsakey import RSAKey
from paramiko.ecdsakey import ECDSAKey
from paramiko.ed25519key import Ed25519Key

from ownerspec import error
from . import base, remote


logger = logging.getLogger(__name__)


class SSHNameService(remote.RemoteNameService, base.NameService):

    connection_attempts = 3
    missing_host_key_policy = paramiko.AutoAddPolicy()
    _client = None

    def __init__(self, host, user=None, port=22, password=None, private_key=None):
        self.host = host
        self.user = user or getpass.getuser()
        self.port = port
        self.password = password
        self.private_key = private_key

    @classmethod
    def from_uri(cls, uri, private_key=None, **options):
        if not uri.hostname:
            raise error.InvalidNameService("'%s' does not name a host" % uri.geturl())
        try:
            port = uri.port or 22
        except ValueError:
            raise error.InvalidNameService("'%s' has an invalid port" % uri.geturl())
        return cls(
            uri.hostname,
            user=unquote(uri.username) if uri.username else None,
            port=port,
            password=unquote(uri.password) if uri.password else None,
            private_key=private_key,
            )

    def get_private_key(self, data):
        for KeyClass in (RSAKey, ECDSAKey, Ed25519Key):
            try:
                fp = io.StringIO(data)
                return KeyClass.from_private_key(fp)
            except SSHException:
                pass
        raise error.ConnectionError("Invalid private_key '%s'" % self.private_key)

    def connect(self):
        if self._client:
            return self

        logger.info("Connecting to %s@%s:%d", self.user, self.host, self.port)

        pkey = None
        if self.private_key and not self.password:
            try:
                with open(self.private_key) as fp:
                    pkey = self.get_private_key(fp.read())
            except IOError as e:
                raise error.ConnectionError(
                    "Unable to read private key '%s': %s" % (self.private_key, e.strerror))

        client = paramiko.SSHClient()
        client.set_missing_host_key_policy(self.missing_host_key_policy)
        for tries in range(self.connection_attempts):
            try:
                if self.password:
                    client.connect(hostname=self.host,
                                   username=self.user,
                                   port=self.port,
                                   password=self.password,
                                   look_for_keys=False)

                elif pkey:
                    client.connect(hostname=self.host,
                                   username=self.user,
                                   port=self.port,
                                   pkey=pkey,
                                   look_for_keys=False)
                else:
                    client.connect(hostname=self.host,
                                   username=self.user,
                                   port=self.port,
                                   look_for_keys=True)
                break

            except (paramiko.PasswordRequiredException, paramiko.AuthenticationException):
                client.close()
                raise error.ConnectionError(
                    "Unable to authenticate with remote server")

            except SSHException as e:
                client.close()
                raise error.ConnectionError(
                    "Unable to establish an SSH session with %s: %s" % (self.host, e))

            except (socket.error, EOFError):
                logger.warning("Connection to %s refused, retrying", self.host)
                time.sleep(tries + 1)
        else:
            client.close()
            raise error.ConnectionError(
                "Connection refused %d times, giving up." % self.connection_attempts)

        try:
            self.verify_transport(client.get_transport())
        except error.ConnectionError:
            client.close()
            raise

        self._client = client
        return self

    def close(self):
        if self._client:
            self._client.close()
            self._client = None

    def verify_transport(self, transport):
        ret, out, err = self._execute(["false"], transport=transport)
        if ret == 0:
            raise error.ConnectionError(
                "Got unusable SSH connection: 'false' has exit code 0, same as 'true'!")

        ret, out, err = self._execute(["true"], transport=transport)
        if ret != 0:
            raise error.ConnectionError(
                "Got unusable SSH connection: 'true' has exit code %d!" % ret)

    def _execute(self, command, transport=None):
        if transport is None:
            transport = self.connect()._client.get_transport()

        try:
            return self._run(transport, command)
        except (SSHException, socket.error, EOFError) as e:
            raise error.ConnectionError(
                "Lost the SSH session to %s while running %s: %s" % (self.host, command[0], e))

    def _run(self, transport, command):
        channel = transport.open_session()

        channel.exec_command(' '.join([shlex.quote(c) for c in command]))

        def recvr(ready, recv, buffer):
            while ready():
                data = recv(1024)
                if data:
                    buffer.append(data)
                gevent.sleep(0.1)

        stdout_buffer = []
        stderr_buffer = []
        while not channel.exit_status_ready():
            rlist, wlist, xlist = select.select([channel], [], [], 1)
            if not rlist:
                continue

            recvr(channel.recv_ready, channel.recv, stdout_buffer)
            recvr(channel.recv_stderr_ready, channel.recv_stderr, stderr_buffer)

        while not channel.eof_received:
            recvr(channel.recv_ready, channel.recv, stdout_buffer)
            recvr(channel.recv_stderr_ready, channel.recv_stderr, stderr_buffer)

        recvr(channel.recv_ready, channel.recv, stdout_buffer)
        recvr(channel.recv_stderr_ready, channel.recv_stderr, stderr_buffer)

        returncode = channel.recv_exit_status()

        channel.close()

        stdout = b''.join(stdout_buffer).decode("utf-8", "replace")
        stderr = b''.join(stderr_buffer).decode("utf-8", "replace")
        return returncode, stdout, stderr
