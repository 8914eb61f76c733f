# zxopt - ZX-diagram simplification and circuit extraction
#         for quantum circuit optimization

# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#    http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from typing import Optional

from .graph_s import GraphS, VT, ET

__all__ = ['Graph', 'GraphS', 'VT', 'ET']

backends = {'simple': GraphS}


def Graph(backend: Optional[str] = None) -> GraphS:
    """Returns an instance of an implementation of a ZX-diagram.

    :param backend: Name of the backend. Only ``simple``, the in-memory
       adjacency dictionary implementation, is available.
    """
    if backend is None:
        backend = 'simple'
    if backend not in backends:
        raise KeyError("Unavailable backend '{}'".format(backend))
    return backends[backend]()
