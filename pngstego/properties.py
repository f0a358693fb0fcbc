import logging


class Dependency:
    '''This makes the relation between fields possible.

    The relation is defined in one direction (usually for unpacking) and
    must be reversed when the value of the dependent field changes.

    In practice this class allows to write something like

        class Simple(Chunk):
            length = fields.StructField('I')
            data = fields.StringField(Dependency('.length'))

    and have the (internal) length of the string contained in the field named 'data'
    strictly connected to the field named 'length'.

    The expression names a sibling field, i.e. a field of the same father,
    prefixed by a dot.

    A field without father (i.e. a prototype living in a class body) has nothing
    to refer to, so the value is cached locally.
    '''
    def __init__(self, expression):
        if not expression.startswith('.'):
            raise ValueError(f'\'{expression}\' must refer to a sibling field, like \'.length\'')

        self.expression = expression
        self.logger = logging.getLogger(__name__)
        self._cache = None

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.expression})>'

    def resolve_field(self, instance):
        self.logger.debug('trying to resolve \'%s\' from field \'%s\'' % (self.expression, instance.name))

        field = getattr(instance.father, self.expression[1:])

        self.logger.debug(' resolved as field %s' % field.__class__.__name__)

        return field

    def resolve(self, instance):
        '''With this method we resolve the attribute with respect to the instance
        passed as argument.'''
        if instance.father is None:
            return self._cache if self._cache is not None else 0

        return self.resolve_field(instance).value

    def resolve_and_set(self, instance, value):
        """Set the value"""
        if instance.father is None:
            self._cache = value
            return

        real_field = self.resolve_field(instance)
        if not hasattr(real_field, 'value'):
            raise ValueError(f'something is wrong with the Dependency resolution!')
        real_field.value = value
