#!/usr/bin/env python3

from .common import *
from .ccitt import *
from .bitrow import *
from .bitpacker import *
from .faxencoder import *
from .faximage import *
