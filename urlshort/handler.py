import logging
from collections import namedtuple
from types import MappingProxyType

import flask
from werkzeug.wsgi import get_path_info


logger = logging.getLogger(__name__)


class Redirect(namedtuple('Redirect', ('destination', 'code'))):
    """
    answers the request with a redirect to destination.

    the action is a WSGI application itself; running it emits
    '302 Found' with the Location header set to destination.
    """
    __slots__ = ()

    def __new__(cls, destination, code=302):
        return super().__new__(cls, destination, code)

    def __call__(self, environ, start_response):
        response = flask.redirect(self.destination, code=self.code)
        return response(environ, start_response)


class Delegate(namedtuple('Delegate', ('fallback',))):
    """
    hands the unchanged request to the fallback WSGI application.
    """
    __slots__ = ()

    def __call__(self, environ, start_response):
        return self.fallback(environ, start_response)


class Resolver:
    def __init__(self, paths_to_urls, fallback):
        """
        paths_to_urls:
            mapping of request paths to redirect destinations.
            a private copy is taken; the resolver only reads from it.
        fallback:
            WSGI application that handles all paths not in the mapping.
        """
        self.paths_to_urls = MappingProxyType(dict(paths_to_urls))
        self.fallback = fallback

    def resolve(self, path):
        """
        returns Redirect for mapped paths, Delegate otherwise.

        matching is exact: case-sensitive, no trailing slash normalization.
        """
        try:
            dest = self.paths_to_urls[path]
        except KeyError:
            logger.debug("no redirect for %r, delegating", path)
            return Delegate(self.fallback)

        logger.debug("redirecting %r to %r", path, dest)
        return Redirect(dest)

    def __len__(self):
        return len(self.paths_to_urls)


def map_handler(paths_to_urls, fallback):
    """
    returns a WSGI application that redirects any path found in
    paths_to_urls to the corresponding URL, and calls the fallback
    WSGI application (e.g. a flask.Flask site) for all other paths.
    """
    resolver = Resolver(paths_to_urls, fallback)

    def handler(environ, start_response):
        action = resolver.resolve(get_path_info(environ))
        return action(environ, start_response)

    handler.resolver = resolver
    return handler
