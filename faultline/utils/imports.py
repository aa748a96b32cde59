import importlib


def import_string(key):
    if '.' not in key:
        return importlib.import_module(key)

    module_name, class_name = key.rsplit('.', 1)
    module = importlib.import_module(module_name)
    try:
        return getattr(module, class_name)
    except AttributeError:
        raise ImportError('%s has no attribute %r' % (module_name, class_name))
