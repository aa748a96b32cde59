"""
faultline.utils.json
~~~~~~~~~~~~~~~~~~~~

:copyright: (c) 2010-2012 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
import datetime
import json
import uuid
from collections.abc import Mapping


class BetterJSONEncoder(json.JSONEncoder):
    ENCODER_BY_TYPE = {
        uuid.UUID: lambda o: o.hex,
        datetime.datetime: lambda o: o.strftime('%Y-%m-%dT%H:%M:%SZ'),
        datetime.date: lambda o: o.isoformat(),
        set: list,
        frozenset: list,
        bytes: lambda o: o.decode('utf-8', errors='replace')
    }

    def encode(self, obj):
        super_encode = super(BetterJSONEncoder, self).encode
        try:
            return super_encode(obj)
        except TypeError:
            # keys which are not strings make the C encoder bail out
            # before `default` is ever called, so coerce them and retry.
            return super_encode(self.encode_keys(obj))

    def encode_keys(self, value):
        if isinstance(value, Mapping):
            return dict((self.encode_key(key), self.encode_keys(val))
                        for key, val in value.items())
        elif isinstance(value, (list, tuple)):
            return [self.encode_keys(val) for val in value]
        return value

    def encode_key(self, key):
        if isinstance(key, (str, int, float, bool)) or key is None:
            return key
        return repr(key)

    def default(self, obj):
        try:
            encoder = self.ENCODER_BY_TYPE[type(obj)]
        except KeyError:
            to_dict = getattr(obj, 'to_dict', None)
            if callable(to_dict):
                return to_dict()
            return repr(obj)
        return encoder(obj)


def dumps(value, **kwargs):
    return json.dumps(value, cls=BetterJSONEncoder, **kwargs)


def loads(value, **kwargs):
    return json.loads(value, **kwargs)


def jsonify_notice(notice):
    """
    Serializes ``notice`` into the JSON payload accepted by the
    faultline errors API.
    """
    return dumps(notice.to_dict())
