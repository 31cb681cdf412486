"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import sys
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local docmeta package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of docmeta modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("docmeta"):
        del sys.modules[module_name]


MOCK_JS = '''\
/**
 * A mock component used to exercise the scanner.
 * @class Mock
 * @extends BaseMock
 * @public
 */
export default class Mock extends BaseMock {
    /**
     * @return {String} a value nobody may change
     */
    get readOnlyProperty() {
        return this._readOnly;
    }

    /**
     * @param {String} value the new value
     */
    set readWriteProperty(value) {
        this._readWrite = value;
    }

    /**
     * @return {String} the current value
     */
    get readWriteProperty() {
        return this._readWrite;
    }

    /**
     * @param {Object} options
     * @param {Number} options.count
     * @return {Boolean}
     */
    render(options) {
        if (options) {
            /** @internal inner blocks are not declarations */
            return true;
        }
        return false;
    }

    /**
     * @param {Event} event
     * @fires Mock#changed
     */
    onChange(event) {
        this.emit("changed", event);
    }
}
'''


@pytest.fixture
def mock_js() -> str:
    """Source of a small documented class with accessors and methods."""
    return MOCK_JS
