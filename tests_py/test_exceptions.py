import warnings

import pytest

from layouty.exceptions import CyclicExtends
from layouty.exceptions import LayoutyAdvisory
from layouty.exceptions import LayoutyException
from layouty.exceptions import OrphanBlock
from layouty.exceptions import TemplateNotFound


class TestTemplateNotFound:

    def test_is_lookup_error(self):
        """Callers that already catch LookupError for missing templates
        must keep working.
        """
        with pytest.raises(LookupError):
            raise TemplateNotFound('layout')

    def test_name(self):
        exc = TemplateNotFound('layout')
        assert exc.template_name == 'layout'
        assert isinstance(exc, LayoutyException)


class TestCyclicExtends:

    def test_message(self):
        exc = CyclicExtends(['a', 'b', 'a'])
        assert exc.chain == ('a', 'b', 'a')
        assert 'a -> b -> a' in str(exc)


class TestOrphanBlock:

    def test_usable_as_warning(self):
        """Advisories must be passable directly to warnings.warn."""
        advisory = OrphanBlock('scripts', 'page')
        assert not isinstance(advisory, LayoutyException)

        with pytest.warns(LayoutyAdvisory, match='scripts'):
            warnings.warn(advisory, stacklevel=1)
