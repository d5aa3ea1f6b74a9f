# flake8: noqa

from skchain.models.sample import branching_tree
from skchain.models.sample import planar_arm
