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
The NSS "files" source: ``/etc/passwd`` and ``/etc/group`` read directly,
either from a directory tree (a chroot, a mounted image) or from text handed
in by the caller.
"""

import logging
import os

from . import base


logger = logging.getLogger(__name__)


class FilesNameService(base.NameService):

    def __init__(self, passwd="", group=""):
        self.passwd = passwd
        self.group = group
        self._parsed = {}

    @classmethod
    def from_root(cls, root="/"):
        return cls(
            passwd=cls._read(os.path.join(root, "etc", "passwd")),
            group=cls._read(os.path.join(root, "etc", "group")),
            )

    @classmethod
    def from_uri(cls, uri, **options):
        return cls.from_root(uri.path or "/")

    @staticmethod
    def _read(path):
        try:
            with open(path) as fp:
                return fp.read()
        except FileNotFoundError:
            logger.warning("'%s' does not exist, treating it as empty", path)
            return ""

    def _records(self, database, parse):
        contents = getattr(self, database)
        cached = self._parsed.get(database)
        if cached is None or cached[0] is not contents:
            cached = self._parsed[database] = (contents, list(self._parse(contents, parse, database)))
        return cached[1]

    def _parse(self, contents, parse, database):
        for lineno, line in enumerate(contents.split("\n"), 1):
            if not line.strip() or line.startswith("#"):
                continue
            try:
                yield parse(line)
            except ValueError as e:
                logger.warning("Skipping malformed %s line %d: %s", database, lineno, e)

    def getpwall(self):
        return self._records("passwd", base.parse_passwd_line)

    def getgrall(self):
        return self._records("group", base.parse_group_line)

    def getpwnam(self, name):
        for user in self.getpwall():
            if user.pw_name == name:
                return user
        raise KeyError(name)

    def getgrnam(self, name):
        for group in self.getgrall():
            if group.gr_name == name:
                return group
        raise KeyError(name)
