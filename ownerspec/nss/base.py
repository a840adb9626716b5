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

import collections
import logging
import re


logger = logging.getLogger(__name__)


_DECIMAL = re.compile(r"[0-9]+\Z")


struct_group = collections.namedtuple("struct_group", \
    ("gr_name", "gr_passwd", "gr_gid", "gr_mem"))

struct_passwd = collections.namedtuple("struct_passwd", \
    ("pw_name", "pw_passwd", "pw_uid", "pw_gid", "pw_gecos", "pw_dir", \
    "pw_shell"))


def _parse_id(text, field):
    if not _DECIMAL.match(text):
        raise ValueError("%s %r is not a number" % (field, text))
    return int(text)


def parse_passwd_line(line):
    """ Turn one ``passwd(5)`` line into a ``struct_passwd``.

    Raises ``ValueError`` if the line does not have seven fields or its ids
    are not numbers. """
    tup = line.split(":")
    if len(tup) != 7:
        raise ValueError("expected 7 fields, got %d" % len(tup))
    return struct_passwd(
        tup[0],
        tup[1],
        _parse_id(tup[2], "uid"),
        _parse_id(tup[3], "gid"),
        tup[4],
        tup[5],
        tup[6],
        )


def parse_group_line(line):
    """ Turn one ``group(5)`` line into a ``struct_group``. """
    tup = line.split(":")
    if len(tup) != 4:
        raise ValueError("expected 4 fields, got %d" % len(tup))
    return struct_group(
        tup[0],
        tup[1],
        _parse_id(tup[2], "gid"),
        [m for m in tup[3].split(",") if m],
        )


class NameService:

    """ A read-only view of a user and group database.

    Subclasses provide ``getpwnam`` and ``getgrnam`` with the semantics of the
    ``pwd`` and ``grp`` modules: return a record or raise ``KeyError``. The
    resolver only ever calls the ``lookup_*`` methods, which turn any miss
    into ``None``. """

    def connect(self):
        """ Make sure the database can be queried. Local backends have nothing
        to do here. """
        return self

    def close(self):
        pass

    def __enter__(self):
        return self.connect()

    def __exit__(self, *exc_info):
        self.close()

    def getpwnam(self, name):
        raise NotImplementedError(self.getpwnam)

    def getgrnam(self, name):
        raise NotImplementedError(self.getgrnam)

    def lookup_user_by_name(self, name):
        try:
            entry = self.getpwnam(name)
        except KeyError:
            logger.debug("No user named %r", name)
            return None
        logger.debug("User %r has uid %d", name, entry.pw_uid)
        return entry

    def lookup_group_by_name(self, name):
        try:
            entry = self.getgrnam(name)
        except KeyError:
            logger.debug("No group named %r", name)
            return None
        logger.debug("Group %r has gid %d", name, entry.gr_gid)
        return entry

    @classmethod
    def from_uri(cls, uri, **options):
        """ Build an instance from a parsed URI (``urllib.parse`` result).
        Backends that take no location ignore it. """
        return cls()
