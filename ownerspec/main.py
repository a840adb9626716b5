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

usage = """usage: {{ cmd }} [options] [USER][:[GROUP]]
look up the numeric user and group ids that an ownership argument, as
given to chown, refers to.
"""

TRY_HELP = "Try '{{ cmd }} --help' for more information."

DEFAULT_FORMAT = "{{ uid }}:{{ gid }}"

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


def _main(argv):
    # We do the imports here so that Ctrl+C doesn't show any ugly traceback
    import os
    import sys
    import optparse
    import logging
    import atexit

    from ownerspec import error, util
    from ownerspec.nss import open_nameservice
    from ownerspec.spec import OwnerParser
    from ownerspec.util.templates import render_string

    prog = os.path.basename(sys.argv[0])
    if not prog or prog.endswith(".py"):
        # python -m ownerspec.main
        prog = "ownerspec"

    parser = optparse.OptionParser(
        prog=prog, version=util.version(), usage=render_string(usage, {"cmd": prog}))
    parser.add_option("-n", "--nss", default=os.environ.get("OWNERSPEC_NSS", "local://"),
                      help="the name service to look names up in: local://, files:///path/to/root or ssh://user@host:port (default: $OWNERSPEC_NSS or local://)")
    parser.add_option("-i", "--private-key", default=None,
                      help="private key file to log in with when using an ssh name service")
    parser.add_option("-f", "--format", default=DEFAULT_FORMAT,
                      help="a Jinja2 template for the output; source, uid and gid are available. ids that were not given render as nothing (default: %default)")
    parser.add_option("", "--log-level", default="warning", choices=LOG_LEVELS,
                      help="the minimum log level to write to the console")
    parser.add_option("-d", "--debug", default=False, action="store_true",
                      help="switch all logging to maximum")
    opts, args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    def err(message):
        sys.stderr.write("%s: %s\n" % (prog, message))

    if not args:
        err("missing operand")
        err(render_string(TRY_HELP, {"cmd": prog}))
        return 1

    if len(args) > 1:
        err("extra operand '%s'" % args[1])
        err(render_string(TRY_HELP, {"cmd": prog}))
        return 1

    logging.basicConfig(
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        level=getattr(logging, opts.log_level.upper()))
    if opts.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    logging.getLogger("paramiko.transport").setLevel(logging.CRITICAL)

    atexit.register(logging.shutdown)

    try:
        with open_nameservice(opts.nss, private_key=opts.private_key) as nameservice:
            spec = OwnerParser(nameservice).parse(args[0])
        output = render_string(opts.format, spec._asdict())
    except error.OwnershipError as e:
        err("%s: '%s'" % (e.description, e.value))
        return e.returncode
    except error.Error as e:
        err(e.msg)
        return e.returncode

    sys.stdout.write(output + "\n")
    return 0


def main(argv=None):
    import sys
    try:
        sys.exit(_main(argv))
    except KeyboardInterrupt:
        print("")
        sys.exit(130)


if __name__ == "__main__":
    main()
