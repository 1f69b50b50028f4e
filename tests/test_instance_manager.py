import pytest
from unittest.mock import patch

from ec2_client.core.exceptions import InvalidArgumentError, ProtocolError
from ec2_client.handlers.instance_manager import InstanceManager, instance_parameters
from ec2_client.handlers.instance_runner import InstanceRunner
from ec2_client.models.instance import Instance
from ec2_client.models.references import ById, ByValue
from tests.conftest import (
    DESCRIBE_INSTANCES_XML,
    ERROR_XML,
    TERMINATE_INSTANCES_XML,
    http_response,
)


@pytest.fixture
def manager(credential, mock_api_client):
    return InstanceManager(credential, mock_api_client)


class TestInstanceParameters:
    def test_none_means_no_ids(self):
        assert instance_parameters(None) == {}

    def test_single_string(self):
        assert instance_parameters('i-1') == {'InstanceId.1': 'i-1'}

    def test_mixed_references_are_positional(self):
        params = instance_parameters(['i-1', Instance(id='i-2'), ById('i-3'), ByValue(Instance(id='i-4'))])
        assert params == {
            'InstanceId.1': 'i-1',
            'InstanceId.2': 'i-2',
            'InstanceId.3': 'i-3',
            'InstanceId.4': 'i-4',
        }

    @pytest.mark.parametrize('bad', [42, '', '   ', 'i-1 i-2', Instance(), object()])
    def test_malformed_references_rejected(self, bad):
        with pytest.raises(InvalidArgumentError):
            instance_parameters([bad])


def test_describe_instances(manager, mock_api_client):
    mock_api_client.respond_with(DESCRIBE_INSTANCES_XML)

    instances = manager.describe_instances(['i-28a64341', 'i-39b75453'])

    mock_api_client.send.assert_called_once_with({
        'Action': 'DescribeInstances',
        'InstanceId.1': 'i-28a64341',
        'InstanceId.2': 'i-39b75453',
    })
    assert set(instances) == {'i-28a64341', 'i-28a64342', 'i-39b75453'}


def test_describe_all(manager, mock_api_client):
    mock_api_client.respond_with(DESCRIBE_INSTANCES_XML)

    manager.describe_instances()

    mock_api_client.send.assert_called_once_with({'Action': 'DescribeInstances'})


def test_describe_reservations(manager, mock_api_client):
    mock_api_client.respond_with(DESCRIBE_INSTANCES_XML)

    reservations = manager.describe_reservations()

    assert [r.id for r in reservations] == ['r-44a5402d', 'r-55b6513e']


def test_describe_instance_requires_single_match(manager, mock_api_client):
    mock_api_client.respond_with(DESCRIBE_INSTANCES_XML)
    assert manager.describe_instance('i-28a64341') is None


def test_invalid_reference_fails_before_request(manager, mock_api_client):
    with pytest.raises(InvalidArgumentError):
        manager.describe_instances([123])
    mock_api_client.send.assert_not_called()


def test_terminate_instances(manager, mock_api_client):
    mock_api_client.respond_with(TERMINATE_INSTANCES_XML)

    changes = manager.terminate_instances(Instance(id='i-3ea74257'))

    mock_api_client.send.assert_called_once_with({
        'Action': 'TerminateInstances',
        'InstanceId.1': 'i-3ea74257',
    })
    assert changes['i-3ea74257'].shutdown_state == 'shutting-down'


@pytest.mark.parametrize('empty', [[], ()])
def test_terminate_requires_an_instance(manager, mock_api_client, empty):
    with pytest.raises(InvalidArgumentError):
        manager.terminate_instances(empty)
    mock_api_client.send.assert_not_called()


def test_get_runner(manager):
    runner = manager.get_runner('ami-60a54009')
    assert isinstance(runner, InstanceRunner)
    assert runner.parameters()['ImageId'] == 'ami-60a54009'


def test_protocol_error_returns_no_entities(credential):
    manager = InstanceManager(credential, endpoint='http://example-host/')
    with patch('ec2_client.handlers.api_client.requests.post',
               return_value=http_response(ERROR_XML, status_code=400)):
        with pytest.raises(ProtocolError):
            manager.describe_instances()


def test_end_to_end_describe(credential):
    manager = InstanceManager(credential, endpoint='http://example-host/')
    with patch('ec2_client.handlers.api_client.requests.post',
               return_value=http_response(DESCRIBE_INSTANCES_XML)):
        instances = manager.describe_instances()

    assert instances['i-28a64341'].dns_name == 'ec2-72-44-33-4.z-2.compute-1.amazonaws.com'
