"""Deprecated alias of :mod:`speckeep`.

Every public name of ``speckeep`` is available here unchanged. Importing this
package logs and warns once per process; new code should import ``speckeep``.
"""

import speckeep
from speckeep._compat import CompatibilityAdapter

CompatibilityAdapter(speckeep, __name__).install(globals())
