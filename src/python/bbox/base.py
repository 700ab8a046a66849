#-*-coding:utf-8-*-
"""
@package bbox.base
@brief Module with the property box, which stages property changes until they are committed.

A box sits on top of a committed snapshot, a mapping of property names to values which is owned by some
storage backend. Writes go into a staged delta, which is only handed to the backend on save(), or thrown
away on cancel().

@author Sebastian Thiel
@copyright [GNU Lesser General Public License](https://www.gnu.org/licenses/lgpl.html)
"""
__all__ = ['PropertyBox']

import logging

from collections.abc import Mapping

from butility import (NoValue,
                      TRACE,
                      is_sequence,
                      values_differ)

log = logging.getLogger('bbox.base')


class PropertyBox(object):
    """Keeps property changes staged on top of a committed snapshot.

    The box is constructed with two functions:

    * read() returns the committed snapshot, a mapping
    * write(modified, boxed, callback) adopts modified as new committed snapshot, and calls callback if it is
      not None. Its return value is passed on as result of save().

    The staged delta is a shallow copy of the committed snapshot which receives all writes. It is created on
    the first write and cleared on save() or cancel(), there is no partial state.
    Properties can be changed, but not removed: backends are free to merge the delta into their snapshot.

    @note the box is single-threaded by nature, each edit session owns its box exclusively
    """
    __slots__ = (
                    '_read',    # read() => committed snapshot
                    '_write',   # write(modified, boxed, callback) => any
                    '_delta'    # None or dict with staged values
                )

    def __init__(self, read, write):
        self._read = read
        self._write = write
        self._delta = None

    # -------------------------
    ## @name Utilities
    # @{

    def _committed_mapping(self):
        """@return the committed snapshot, or an empty dict if the backend doesn't provide a mapping"""
        committed = self._read()
        if not isinstance(committed, Mapping):
            return dict()
        return committed

    def _modified(self):
        """@return our delta, creating it from the committed snapshot if needed"""
        if self._delta is None:
            self._delta = dict(self._committed_mapping())
        return self._delta

    ## -- End Utilities -- @}

    # -------------------------
    ## @name Interface
    # @{

    def value(self, name):
        """@return the staged value of the property with the given name, or its committed value if it wasn't
        changed, or NoValue if it doesn't exist"""
        if self._delta is not None and name in self._delta:
            return self._delta[name]
        return self._committed_mapping().get(name, NoValue)

    def set_value(self, name, value):
        """Stage the given value for the property with the given name. The backend is not touched.
        @return this instance"""
        self._modified()[name] = value
        return self

    def save(self, callback=None):
        """Commit the staged delta to the backend, which is responsible for adopting it as new committed
        snapshot.

        @param callback if not None, it will be called once the backend accepted the changes. If there is
        nothing to commit, it will be called right away.
        @return whatever the backend's write function returns, or the callback's result if there was nothing
        to commit
        @note the delta is cleared before the backend is called, it can't be restored if the backend fails"""
        if self._delta is None:
            log.debug("Nothing staged - save() only invokes the callback")
            if callback is not None:
                return callback()
            return None
        # end handle nothing to commit

        modified = self._delta
        self._delta = None
        log.log(TRACE, "committing %i properties", len(modified))
        return self._write(modified, True, callback)

    def cancel(self):
        """Discard all staged changes without touching the backend
        @return this instance"""
        if self._delta is not None:
            log.log(TRACE, "discarding %i staged properties", len(self._delta))
        # end log discard
        self._delta = None
        return self

    def delta(self):
        """@return our staged delta itself (not a copy), or None if nothing is staged"""
        return self._delta

    def has_delta(self):
        """@return True if there are staged changes"""
        return self._delta is not None

    def committed(self):
        """@return the committed snapshot as provided by the backend"""
        return self._read()

    def is_dirty(self, attributes=None):
        """@return True if the given attributes differ between the committed snapshot and the staged delta.
        @param attributes a list or tuple of names, a mapping whose keys are names, a single name,
        or None to check all known properties
        @note values are compared strictly, see butility.values_differ()"""
        if self._delta is None:
            return False
        # end handle nothing staged

        committed = self._committed_mapping()
        if attributes is None:
            names = list(committed.keys()) + [name for name in self._delta if name not in committed]
        elif is_sequence(attributes):
            names = attributes
        elif isinstance(attributes, Mapping):
            names = attributes.keys()
        else:
            names = (attributes, )
        # end handle attributes shape

        for name in names:
            if values_differ(committed.get(name, NoValue), self.value(name)):
                return True
        # end for each name
        return False

    ## -- End Interface -- @}

# end class PropertyBox
