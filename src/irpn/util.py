from functools import wraps


class RPNError(Exception):
    pass


class InvalidInput(RPNError):
    def __init__(self, token):
        super().__init__("Invalid input: '{}'".format(token))
        self.token = token


class EndOfStack(RPNError):
    def __init__(self):
        super().__init__('Stack is empty')


class EndOfRegister(RPNError):
    def __init__(self, id):
        super().__init__('Register {} is empty'.format(id))
        self.id = id


class BadRadix(RPNError):
    def __init__(self, value):
        super().__init__('Bad radix: {}'.format(value))
        self.value = value


class DivideByZero(RPNError):
    def __init__(self):
        super().__init__('Divide by zero')


def wrap_user_errors(error):
    '''
    Decorator that converts lookup and value failures into user errors.

    :param error: Called with the wrapped function's arguments, returns the
                  RPNError to raise instead.

    Passes through RPNErrors.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except RPNError:
                raise
            except (LookupError, ValueError) as e:
                raise error(*args, **kwargs) from e
        return wrapper
    return decorator
