# flake8: noqa

from skchain.model.body import Body

from skchain.model.joint import CylindricalJoint
from skchain.model.joint import FixedJoint
from skchain.model.joint import FreeJoint
from skchain.model.joint import Joint
from skchain.model.joint import PlanarJoint
from skchain.model.joint import PrismaticJoint
from skchain.model.joint import RevoluteJoint
from skchain.model.joint import SphericalJoint

from skchain.model.joint import calc_target_joint_dimension

from skchain.model.topology import Topology

from skchain.model.configuration import Configuration
from skchain.model.configuration import check_match_alpha
from skchain.model.configuration import check_match_body_pos
from skchain.model.configuration import check_match_joint_config
from skchain.model.configuration import check_match_q
from skchain.model.configuration import forward_kinematics
