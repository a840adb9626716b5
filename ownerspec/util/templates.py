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

from jinja2 import Environment, StrictUndefined
from jinja2.exceptions import UndefinedError, TemplateSyntaxError

from ownerspec import error


def get_template_environment():
    """
    Sets up a standard ownerspec template rendering environment

    Templates are short, user supplied strings so:

      * There is no loader - everything is rendered from a string
      * Referencing a variable that isn't defined is an error rather than
        silently rendering nothing
      * ``None`` renders as an empty string, so an id that was left out of a
        spec shows up as a gap rather than the word "None"

    """
    env = Environment(
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        finalize=lambda value: "" if value is None else value,
        )
    return env


def _call_get(callable, *args, **kwargs):
    try:
        return callable(*args, **kwargs)
    except TemplateSyntaxError as e:
        raise error.ParseError("Invalid template at line %d: %s" % (e.lineno, e.message))


def _call_render(template, *args, **kwargs):
    try:
        return template.render(*args, **kwargs)
    except UndefinedError as e:
        raise error.ParseError("Unknown template variable: %s" % e.message)


def render_string(contents, arguments):
    """
    Render ``contents`` as a template with ``arguments`` as its context.

    Template exceptions will be mapped to ``ParseError``.
    """
    env = get_template_environment()
    template = _call_get(env.from_string, contents)
    return _call_render(template, arguments)
