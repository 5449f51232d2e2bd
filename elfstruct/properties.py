import logging
from enum import Enum
from typing import List, Optional


def get_root_from_chunk(instance):
    return get_instance_from_chunk(instance, condition=lambda x: x.father is None)


def get_instance_from_class_name(instance, name):
    return get_instance_from_chunk(instance, condition=lambda x: x.__class__.__name__ == name)


def get_instance_from_chunk(instance, condition):
    '''Walk up the hierarchy until condition() holds; return None if no ancestor matches.'''
    while instance is not None:
        if condition(instance):
            return instance

        instance = instance.father

    return None


class Dependency:
    '''This makes the relation between fields possible.

    In practice this class allows to write something like

        class Simple(Chunk):
            length = fields.StructField('I')
            data = fields.StringField(n=Dependency('.length'))

    and have the length of the string contained in the field named 'data'
    read from the field named 'length' at unpacking time.

    The syntax for defining the expression is inspired from module resolution
    with an extra element via the first char of the expression:

     - '.' indicates we refer to a field at the same level
     - '@' indicates the the first component is the name of a class
     - otherwise the resolution starts from the root chunk
    '''
    def __init__(self, expression):
        self.expression = expression
        self.logger = logging.getLogger(__name__)
        self._hierarchy: List["Field"] = []

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.expression})>'

    def _resolve_wrt_class(self, instance, fields_path: List[str]):
        class_name = fields_path[0][1:]
        self.logger.debug('resolve from class name: \'%s\'' % class_name)
        field = get_instance_from_class_name(instance, class_name)

        if field is None:
            raise AttributeError(f'no ancestor of class \'{class_name}\' for {instance!r}')

        return field, fields_path[1:]  # skip the first one that is already resolved

    def resolve_field(self, instance):
        self.logger.debug('trying to resolve \'%s\'' % self.expression)

        self._hierarchy = []

        # '.miao'.split(".") -> ['', 'miao']
        # 'miao'.split(".") -> ['miao']
        fields_path = self.expression.split('.')

        # find the root the resolution starts
        if fields_path[0] != '':
            if fields_path[0].startswith('@'):
                field, fields_path = self._resolve_wrt_class(instance, fields_path)
            else:
                field = get_root_from_chunk(instance)
                self.logger.debug(' resolve from root: \'%s\'' % field.__class__.__name__)
        else:  # we have a relative dependency
            field = instance.father
            self.logger.debug(' resolve from father: \'%s\'' % field.__class__.__name__)
            fields_path = fields_path[1:]  # skip the first one that is empty

        self._hierarchy.append(field)

        for component_name in fields_path:
            field = getattr(field, component_name)
            self.logger.debug(' resolved sub-component "%s" from "%s"' % (
                field.__class__.__name__, component_name))
            self._hierarchy.append(field)

        return field

    def resolve(self, instance):
        '''With this method we resolve the attribute with respect to the instance
        passed as argument.'''
        field = self.resolve_field(instance)
        value = field.value

        # enumerated fields are used as numbers
        if isinstance(value, Enum):
            value = value.value

        self.logger.debug(' resolved with value %s' % value)

        return value


def resolve(value, instance) -> Optional[int]:
    '''Return value itself or, if it's a Dependency, its resolution wrt instance.'''
    if isinstance(value, Dependency):
        return value.resolve(instance)

    return value
