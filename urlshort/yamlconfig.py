import logging
from collections import namedtuple

import yaml

from .handler import map_handler


logger = logging.getLogger(__name__)


PathEntry = namedtuple('PathEntry', ('path', 'url'))

FIELDS = PathEntry._fields


class ParseError(ValueError):
    """
    raised when a document does not conform to the list-of-records format.

    nothing is loaded if this is raised; the YAML error that caused it,
    if any, is available as __cause__.
    """


class StrictLoader(yaml.SafeLoader):
    """
    SafeLoader that refuses mappings with duplicate keys
    instead of silently keeping the last value.
    """
    def construct_mapping(self, node, deep=False):
        if isinstance(node, yaml.MappingNode):
            seen = set()
            for key_node, _ in node.value:
                if key_node.tag == 'tag:yaml.org,2002:merge':
                    continue
                key = self.construct_object(key_node, deep=deep)
                try:
                    duplicate = key in seen
                    seen.add(key)
                except TypeError:
                    # unhashable keys are reported by SafeLoader itself
                    continue
                if duplicate:
                    raise yaml.constructor.ConstructorError(
                        "while constructing a mapping", node.start_mark,
                        "found duplicate key {!r}".format(key),
                        key_node.start_mark)

        return super().construct_mapping(node, deep=deep)


def parse_yaml(document):
    """
    parses a YAML document (bytes or str) of the form

        - path: /some-path
          url: https://www.some-url.com/demo

    into a list of PathEntry, in document order.

    parsing is strict: unknown, missing, duplicate or non-string fields
    raise ParseError for the whole document. an empty document yields [].
    """
    try:
        data = yaml.load(document, Loader=StrictLoader)
    except yaml.YAMLError as e:
        raise ParseError("invalid YAML: {}".format(e)) from e

    if data is None:
        return []

    if not isinstance(data, list):
        raise ParseError(
            "expected a sequence of path/url records, got {}".format(
                type(data).__name__))

    entries = []
    for idx, record in enumerate(data):
        if not isinstance(record, dict):
            raise ParseError("record {}: expected a mapping, got {}".format(
                idx, type(record).__name__))

        unknown = [key for key in record if key not in FIELDS]
        if unknown:
            raise ParseError("record {}: unknown field(s): {}".format(
                idx, ", ".join(repr(key) for key in unknown)))

        missing = [field for field in FIELDS if field not in record]
        if missing:
            raise ParseError("record {}: missing field(s): {}".format(
                idx, ", ".join(missing)))

        for field in FIELDS:
            if not isinstance(record[field], str):
                raise ParseError("record {}: {} must be a string, got {}".format(
                    idx, field, type(record[field]).__name__))

        entries.append(PathEntry(record['path'], record['url']))

    return entries


def build_map(entries):
    """
    folds PathEntry records into a dict of path -> url.
    later entries win over earlier ones with the same path.
    """
    paths_to_urls = {}
    for entry in entries:
        if entry.path in paths_to_urls:
            logger.debug("%r redefined: %r replaces %r", entry.path,
                         entry.url, paths_to_urls[entry.path])
        paths_to_urls[entry.path] = entry.url

    return paths_to_urls


def load(document):
    """
    returns the path -> url dict described by the YAML document.

    raises ParseError; see parse_yaml.
    """
    entries = parse_yaml(document)
    paths_to_urls = build_map(entries)
    logger.info("loaded %d redirect(s) from %d record(s)",
                len(paths_to_urls), len(entries))
    return paths_to_urls


def yaml_handler(document, fallback):
    """
    parses the YAML document and returns a WSGI application that
    redirects the paths it names, and calls fallback for all others.

    the only error that can be raised is ParseError, in which case no
    handler is built.

    see map_handler for building the same handler from a dict.
    """
    return map_handler(load(document), fallback)
