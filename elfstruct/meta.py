import copy
import logging
from enum import Enum, auto


class Endianess(Enum):
    LITTLE_ENDIAN = auto()
    BIG_ENDIAN    = auto()


class FieldDescriptor(object):
    """Wrapper around field access of a Field related class."""

    def __init__(self, field_instance: "Field", field_name: str):
        self.logger = logging.getLogger(f"{self.__module__}.{self.__class__.__name__}")
        self.field = field_instance
        self.field.name = field_name

    def __get__(self, instance, type=None):
        # accessed from the class we return the prototype
        if instance is None:
            return self.field

        data = instance.__dict__

        if self.field.name not in data:
            self.logger.debug("create new field for field named '%s'", self.field.name)
            data[self.field.name] = self.field.create(father=instance)

        return data[self.field.name]

    def __set__(self, instance, value):
        raise AttributeError(f"field '{self.field.name}' is read-only")


class FieldBase(object):

    def contribute_to_chunk(self, cls, name):
        if not getattr(cls, name, None):
            setattr(cls, name, FieldDescriptor(self, name))
        else:
            raise AttributeError(f'field {name} is already present in class {cls.__name__}')

    def create(self, father):
        instance = copy.deepcopy(self)
        instance.father = father
        return instance


class Meta(object):
    """Class containing metadata about the layout"""

    def __init__(self):
        self.fields = []


class MetaChunk(type):

    def __new__(cls, names, bases, attrs):
        '''Collect the fields in declaration order, a little like Django does for models.'''
        module = attrs.pop('__module__')
        classcell = attrs.pop('__classcell__', None)

        new_attrs = {
            '__module__': module,
        }
        if classcell is not None:
            new_attrs['__classcell__'] = classcell
        new_cls = super(MetaChunk, cls).__new__(cls, names, bases, new_attrs)

        new_cls._meta = Meta()

        # handle inheritance
        parents = [_ for _ in bases if isinstance(_, MetaChunk)]
        for parent in parents:
            for obj_name in parent._meta.fields:
                obj = parent.__dict__[obj_name]
                setattr(new_cls, obj_name, obj)
                new_cls._meta.fields.append(obj_name)

        for obj_name, obj in attrs.items():
            new_cls.add_to_class(obj_name, obj)

        return new_cls

    def add_to_class(cls, name, value):
        if isinstance(value, FieldBase):
            logging.getLogger(__name__).debug('field \'%s\' added to \'%s\'', name, cls.__name__)
            cls._meta.fields.append(name)
            value.contribute_to_chunk(cls, name)
        else:
            setattr(cls, name, value)
