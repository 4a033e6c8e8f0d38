# Models Package
# MVC Model Layer - Pydantic Models

from .transaction import *
from .price import *
from .advisory import *
from .audit import *
from .response import *
from .health import *
