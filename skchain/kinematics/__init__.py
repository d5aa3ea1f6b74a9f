# flake8: noqa

from skchain.kinematics.jacobian import Jacobian
