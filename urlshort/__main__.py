#!/usr/bin/env python3
import argparse
import logging
import os

import flask

from .yamlconfig import ParseError, yaml_handler


cfgpath = os.path.expanduser('~/.urlshort')

logger = logging.getLogger(__name__)


def fallback_site():
    """
    the site that answers every path without a redirect
    """
    site = flask.Flask("urlshort")

    @site.route('/', defaults={'link': ''})
    @site.route('/<path:link>')
    def unknown(link):
        return "unknown redirect", 404

    return site


def create_site(document):
    """
    returns the fallback site, with the redirects from the YAML document
    installed in front of it.

    raises ParseError if the document is invalid; nothing is installed then.
    """
    site = fallback_site()
    site.wsgi_app = yaml_handler(document, site.wsgi_app)
    return site


def main():
    cli = argparse.ArgumentParser(
        prog="urlshort",
        description="redirects the paths listed in a YAML file")
    cli.add_argument("paths", nargs='?', default=cfgpath + '/paths.yaml',
                     help="YAML list of path/url records (default: %(default)s)")
    cli.add_argument("--host", default="127.0.0.1")
    cli.add_argument("--port", type=int, default=8080)
    cli.add_argument("--verbose", "-v", action="store_true")
    args = cli.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    with open(args.paths, 'rb') as f:
        document = f.read()

    try:
        site = create_site(document)
    except ParseError as e:
        logger.error("could not load %s: %s", args.paths, e)
        raise

    site.run(host=args.host, port=args.port)


if __name__ == '__main__':
    main()
