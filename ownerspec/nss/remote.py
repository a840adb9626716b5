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

"""
A mixin for name services that are based on the execution of shell commands
on another machine - for example, over ssh
"""

import logging

from . import base


logger = logging.getLogger(__name__)


class RemoteNameService:

    """ Answers lookups with ``getent`` so that whatever the remote NSS
    configuration points at (files, LDAP, sssd...) is consulted. Subclasses
    provide ``execute(command)`` returning ``(returncode, stdout, stderr)``. """

    def execute(self, command):
        return self._execute(command)

    def _getent(self, database, name, parse):
        returncode, stdout, stderr = self.execute(["getent", database, "--", name])
        if returncode != 0:
            # getent exits 2 for a missing key
            logger.debug("getent %s %r returned %d: %s", database, name, returncode, stderr.strip())
            raise KeyError(name)

        line = stdout.split("\n")[0].strip()
        try:
            return parse(line)
        except ValueError as e:
            logger.warning("Could not parse getent %s output %r: %s", database, line, e)
            raise KeyError(name)

    def getpwnam(self, name):
        user = self._getent("passwd", name, base.parse_passwd_line)
        # getent treats a numeric key as a uid
        if user.pw_name != name:
            raise KeyError(name)
        return user

    def getgrnam(self, name):
        group = self._getent("group", name, base.parse_group_line)
        if group.gr_name != name:
            raise KeyError(name)
        return group
