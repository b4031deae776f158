#!/usr/bin/env python3

import inspect,sys

# ========================================================= MESSAGES

def eprint(*args, **kwargs):
    print(*args, file=sys.stderr, **kwargs)

def caller(depth:int = 2):
    '''
    Returns 'Class.func()' for the function that is depth frames up the stack from this one,
    or 'global.func()' if that function is not a method.
    '''
    frame = inspect.stack()[depth][0]
    the_class = frame.f_locals["self"].__class__.__name__ if "self" in frame.f_locals \
        else frame.f_locals["cls"].__name__ if "cls" in frame.f_locals \
        else 'global'
    return f'{the_class}.{frame.f_code.co_name}()'

def msg(msg):
    '''Prints a message in the form: 'Class.func(): msg', where func() is the function that called msg().'''
    eprint(f'{caller(2)}: {msg}')

def warn(msg):
    '''Prints a warning message in the form: 'Class.func(): warning: msg', where func() is the function that called warn().'''
    eprint(f'{caller(2)}: warning: {msg}')
