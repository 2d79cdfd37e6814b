"""Fixtures specific to integration tests."""

import pytest

from rds_tag_setter.handler import TagSetter


@pytest.fixture(autouse=True)
def _mark_as_integration(request):
    """Automatically mark all tests in integration/ as integration tests."""
    request.node.add_marker(pytest.mark.integration)


@pytest.fixture
def tag_setter(mock_rds, mock_sts):
    """TagSetter wired to the shared mock RDS and STS clients."""
    return TagSetter(rds=mock_rds, sts=mock_sts)


@pytest.fixture
def assert_no_aws_calls(mock_rds, mock_sts):
    """Helper asserting that none of the three AWS operations was called."""

    def _assert():
        mock_rds.describe_db_instances.assert_not_called()
        mock_sts.get_caller_identity.assert_not_called()
        mock_rds.add_tags_to_resource.assert_not_called()

    return _assert
