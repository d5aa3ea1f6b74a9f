import numpy as np

from skchain.coordinates.math import _check_valid_rotation
from skchain.coordinates.math import _check_valid_translation
from skchain.coordinates.math import outer_product_matrix


class SpatialTransform(object):
    """Plucker transform specified by rotation and translation

    A transform ``X_a_b`` maps spatial vectors expressed in frame ``a`` to
    frame ``b``. ``rotation`` (``E``) maps coordinates of frame ``a`` into
    frame ``b`` (the transpose of the usual orientation matrix of ``b``
    seen from ``a``) and ``translation`` (``r``) is the origin of ``b``
    expressed in ``a``.

    Spatial motion vectors are ordered ``[angular; linear]``.

    Parameters
    ----------
    rotation : numpy.ndarray(3, 3) or None
        Plucker rotation ``E``. Identity if `None`.
    translation : list(3,) or numpy.ndarray(3,) or None
        translation ``r``. Zero if `None`.
    check_validity : bool (optional)
        Default `True`.
        If this value is `True`, check whether an input rotation
        and an input translation are valid.
    """

    def __init__(self, rotation=None, translation=None, check_validity=True):
        if rotation is None:
            rotation = np.eye(3)
        elif check_validity:
            rotation = _check_valid_rotation(rotation)
        if translation is None:
            translation = np.zeros(3)
        elif check_validity:
            translation = _check_valid_translation(translation)
        self._rotation = rotation
        self._translation = translation

    @property
    def rotation(self):
        """Return a copy of the Plucker rotation ``E``."""
        return self._rotation.copy()

    @property
    def translation(self):
        """Return a copy of the translation ``r``."""
        return self._translation.copy()

    def rotation_only(self):
        """Return the transform keeping only the rotation part."""
        return SpatialTransform(self._rotation, check_validity=False)

    def inverse_transformation(self):
        """Return inverse transform

        Returns
        -------
        inv_transform : skchain.coordinates.SpatialTransform
            ``X_b_a`` for this ``X_a_b``.
        """
        return SpatialTransform(self._rotation.T,
                                -self._rotation.dot(self._translation),
                                check_validity=False)

    def __mul__(self, other):
        """Composite this transform with other transform

        Parameters
        ----------
        other : skchain.coordinates.SpatialTransform
            the other transform.

        Returns
        -------
        tf : skchain.coordinates.SpatialTransform
            Let this (self) transform be ``X_b_c`` and the other ``X_a_b``,
            then ``X_a_c = X_b_c * X_a_b``. The right operand is applied
            first.
        """
        if not isinstance(other, SpatialTransform):
            return NotImplemented
        rot = self._rotation.dot(other._rotation)
        trans = other._translation + \
            other._rotation.T.dot(self._translation)
        return SpatialTransform(rot, trans, check_validity=False)

    def matrix(self):
        """Return the 6x6 matrix acting on motion vectors.

        .. math::
            \\left(
                \\begin{array}{cc}
                  E & 0 \\\\
                  -E r\\times & E
                \\end{array}
            \\right)
        """
        E = self._rotation
        m = np.zeros((6, 6))
        m[:3, :3] = E
        m[3:, :3] = -E.dot(outer_product_matrix(self._translation))
        m[3:, 3:] = E
        return m

    def dual_matrix(self):
        """Return the 6x6 matrix acting on force vectors."""
        E = self._rotation
        m = np.zeros((6, 6))
        m[:3, :3] = E
        m[:3, 3:] = -E.dot(outer_product_matrix(self._translation))
        m[3:, 3:] = E
        return m

    def apply(self, motion):
        """Apply this transform to motion vector/vectors

        Parameters
        ----------
        motion : numpy.ndarray(6,) or numpy.ndarray(6, n)
            a spatial motion vector or the columns of a motion subspace.

        Returns
        -------
        motion_transformed : numpy.ndarray(6,) or numpy.ndarray(6, n)
        """
        motion = np.asarray(motion, dtype=np.float64)
        assert motion.ndim < 3 and motion.shape[0] == 6, \
            "motion must be either (6,) or (6, n)."
        return self.matrix().dot(motion)

    def allclose(self, other, rtol=1e-05, atol=1e-08):
        return np.allclose(self._rotation, other._rotation,
                           rtol=rtol, atol=atol) and \
            np.allclose(self._translation, other._translation,
                        rtol=rtol, atol=atol)

    def copy(self):
        return SpatialTransform(self._rotation.copy(),
                                self._translation.copy(),
                                check_validity=False)

    def __repr__(self):
        return self.__str__()

    def __str__(self):
        return '#<{} {} rot={} pos={}>'.format(
            self.__class__.__name__, hex(id(self)),
            np.array2string(self._rotation.flatten(), precision=3),
            np.array2string(self._translation, precision=3))


def make_spatial_transform(rot=None, pos=None):
    """Return SpatialTransform from an orientation matrix and a position.

    Parameters
    ----------
    rot : numpy.ndarray(3, 3) or None
        orientation of the target frame seen from the source frame (its
        columns are the target axes). Identity if `None`.
    pos : list(3,) or numpy.ndarray(3,) or None
        origin of the target frame in the source frame.

    Returns
    -------
    tf : skchain.coordinates.SpatialTransform

    Examples
    --------
    >>> import numpy as np
    >>> from skchain.coordinates import make_spatial_transform
    >>> from skchain.coordinates.math import rotation_matrix
    >>> tf = make_spatial_transform(rotation_matrix(np.pi / 2.0, 'z'),
    ...                             [1, 0, 0])
    >>> tf.translation
    array([1., 0., 0.])
    """
    if rot is not None:
        rot = _check_valid_rotation(rot).T
    return SpatialTransform(rot, pos)
