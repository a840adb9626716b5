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

Classes that represent errors within ownerspec.

What is listed here are the exceptions raised within Python, with an
explanation of their meaning. If you wish to detect a specific error on
invocation, you can do so via the return code of the ownerspec process.

All ownerspec errors have a returncode, which is returned from the ownerspec
program if these errors occur. Feel free to rely on these, they should be
stable. """


class Error(Exception):
    """ Base class for all ownerspec specific exceptions. """
    returncode = 253

    def __init__(self, msg=""):
        super().__init__(msg)
        self.msg = msg

    def __str__(self):
        return "%s: %s" % (self.__class__.__name__, self.msg)


class ParseError(Error):
    """ Root of exceptions that are caused by an error in input. """

    returncode = 128
    """ returns error code 128 to the invoking environment. """


class OwnershipError(ParseError):
    """ Root of exceptions raised while resolving an ownership specification.
    The text that could not be resolved is kept as ``value``. """

    description = "invalid ownership specification"

    def __init__(self, value, msg=""):
        super().__init__(msg or "%s: '%s'" % (self.description, value))
        self.value = value


class InvalidGroup(OwnershipError):
    """ The group component is neither a known group name nor a numeric
    group id. """
    description = "invalid group"
    returncode = 140
    """ returns error code 140 to the invoking environment. """


class InvalidUser(OwnershipError):
    """ The user component is neither a known user name nor a numeric user
    id. """
    description = "invalid user"
    returncode = 141
    """ returns error code 141 to the invoking environment. """


class InvalidSpec(OwnershipError):
    """ The specification contradicts itself. A trailing delimiter asks for
    the login group of the user, which only exists for users found by name,
    so ``1001:`` is rejected even though ``1001`` is a valid user id. """
    description = "invalid spec"
    returncode = 153
    """ returns error code 153 to the invoking environment. """


class InvalidNameService(ParseError):
    """ The name service URI names a scheme that there is no backend for, or
    is missing parts the backend needs. """
    returncode = 154
    """ returns error code 154 to the invoking environment. """


class ExecutionError(Error):
    """ Root of exceptions that are caused by execution failing in an unexpected way. """
    returncode = 130
    """ returns error code 130 to the invoking environment. """


class MissingDependency(ExecutionError):
    """ A module required by a name service backend is missing """
    returncode = 152


class ConnectionError(ExecutionError):
    """ An error occured while establishing a remote connection """
    returncode = 255
