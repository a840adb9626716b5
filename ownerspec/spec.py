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
Parsing of the ``[USER][:[GROUP]]`` ownership argument taken by chown and
friends, with the results looked up in a name service.

The rules match ``info coreutils 'chown invocation'``:

 * ``user`` sets the owner only.
 * ``user:group`` sets both.
 * ``user:`` sets the owner and the group to the owner's login group.
 * ``:group`` sets the group only.
 * Names that are not found are tried as decimal ids.
 * ``.`` is accepted as a delimiter for historical reasons, but only once
   the whole argument has been ruled out as a user name.
"""

import collections
import re

from ownerspec import error


USER = "user"
GROUP = "group"

MAX_ID = 2 ** 32 - 1

_DECIMAL = re.compile(r"[0-9]+\Z")


OwnershipSpec = collections.namedtuple("OwnershipSpec", ("source", "uid", "gid"))

Split = collections.namedtuple("Split", ("user", "group", "has_delimiter", "ambiguous"))


def classify(source):
    """ Decide where ``source`` splits into user and group.

    A colon always wins. Failing that the first dot is used, and the split is
    flagged as ambiguous because dots are legal in user names. """
    pos = source.find(":")
    ambiguous = False
    if pos == -1:
        pos = source.find(".")
        ambiguous = pos != -1

    if pos == -1:
        return Split(source, "", False, False)

    return Split(source[:pos], source[pos + 1:], True, ambiguous)


def parse_id(text, exc_class):
    """ A plain decimal number that fits in 32 bits, or ``exc_class`` """
    if not _DECIMAL.match(text):
        raise exc_class(text)
    value = int(text)
    if value > MAX_ID:
        raise exc_class(text)
    return value


def resolve_user(nameservice, name, login_group=False):
    """ Returns ``(uid, gid)`` for the user part of a spec. ``gid`` is only
    filled in when ``login_group`` is set, from the same passwd entry. """
    if not name:
        return None, None

    entry = nameservice.lookup_user_by_name(name)
    if entry is not None:
        return entry.pw_uid, entry.pw_gid if login_group else None

    if login_group:
        raise error.InvalidSpec(name)

    return parse_id(name, error.InvalidUser), None


def resolve_group(nameservice, name):
    if not name:
        return None

    entry = nameservice.lookup_group_by_name(name)
    if entry is not None:
        return entry.gr_gid

    return parse_id(name, error.InvalidGroup)


def resolve(nameservice, kind, text, login_group=False):
    """ Resolve one component of a spec to a numeric id, or ``None`` if it
    was left empty. ``kind`` is ``USER`` or ``GROUP``. """
    if kind == USER:
        return resolve_user(nameservice, text, login_group=login_group)[0]
    if kind == GROUP:
        return resolve_group(nameservice, text)
    raise ValueError("kind must be %r or %r, not %r" % (USER, GROUP, kind))


def first_success(*attempts):
    """ Call each attempt in turn and return the first result. An
    ``OwnershipError`` moves on to the next attempt; the last attempt's error
    is the one that propagates. """
    for attempt in attempts[:-1]:
        try:
            return attempt()
        except error.OwnershipError:
            continue
    return attempts[-1]()


def _resolve_ids(nameservice, user, group, has_delimiter):
    use_login_group = not group and has_delimiter

    uid, gid = resolve_user(nameservice, user, login_group=use_login_group)

    if group:
        gid = resolve_group(nameservice, group)

    return uid, gid


def resolve_spec(nameservice, source):
    """ Resolve an ownership argument to an ``OwnershipSpec``.

    ``nameservice`` is anything with ``lookup_user_by_name`` and
    ``lookup_group_by_name`` (see ``ownerspec.nss``); it is used as given,
    never opened or closed here. Raises ``InvalidUser``, ``InvalidGroup`` or
    ``InvalidSpec``. """
    split = classify(source)

    def as_split():
        return _resolve_ids(nameservice, split.user, split.group, split.has_delimiter)

    if split.ambiguous:
        uid, gid = first_success(
            lambda: _resolve_ids(nameservice, source, "", False),
            as_split,
            )
    else:
        uid, gid = as_split()

    return OwnershipSpec(source, uid, gid)


class OwnerParser:

    """ Parse file owner arguments against one name service, for use as an
    option type by command line tools. """

    def __init__(self, nameservice):
        self.nameservice = nameservice

    def parse(self, arg):
        return resolve_spec(self.nameservice, arg)

    __call__ = parse
