import code
import logging

from smflib import plumbing as p
from smflib.plumbing.common import *
from smflib.plumbing.smf import *
from smflib.tasks import smf as tasks


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    code.interact(local=globals())
