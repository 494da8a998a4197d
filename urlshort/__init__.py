from .handler import Delegate, Redirect, Resolver, map_handler
from .yamlconfig import (ParseError, PathEntry, build_map, load, parse_yaml,
                         yaml_handler)
