class Body(object):
    """Rigid body of an articulated tree.

    Parameters
    ----------
    name : str
        unique name used to look the body up in a topology.
    """

    def __init__(self, name):
        self.name = name

    def __repr__(self):
        return self.__str__()

    def __str__(self):
        return '#<{} {} {}>'.format(
            self.__class__.__name__, hex(id(self)), self.name)
