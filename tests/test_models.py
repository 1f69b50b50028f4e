import pytest

from ec2_client.core.exceptions import InvalidArgumentError
from ec2_client.models.instance import Instance, InstanceState, InstanceType
from ec2_client.models.references import ById, ByValue, as_reference
from ec2_client.models.zones import Zones


class TestReferences:
    def test_string_becomes_by_id(self):
        assert as_reference('i-1') == ById('i-1')

    def test_instance_becomes_by_value(self):
        instance = Instance(id='i-2')
        reference = as_reference(instance)
        assert reference == ByValue(instance)
        assert reference.resolve_identifier() == 'i-2'

    def test_existing_reference_passes_through(self):
        reference = ById('i-3')
        assert as_reference(reference) is reference

    @pytest.mark.parametrize('value', [None, 7, ['i-1'], {'id': 'i-1'}])
    def test_other_values_rejected(self, value):
        with pytest.raises(InvalidArgumentError):
            as_reference(value)

    @pytest.mark.parametrize('identifier', ['', ' i-1', 'i-1\n', 'i -1'])
    def test_malformed_identifier(self, identifier):
        with pytest.raises(InvalidArgumentError):
            ById(identifier).resolve_identifier()

    def test_empty_identifier_message_names_kind(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            ById('', 'image').resolve_identifier()
        assert str(exc_info.value).startswith('The image identifier must be')

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            ById('').resolve_identifier()


class TestInstance:
    def test_str_is_id(self):
        assert str(Instance(id='i-1')) == 'i-1'

    def test_is_immutable(self):
        instance = Instance(id='i-1')
        with pytest.raises(AttributeError):
            instance.id = 'i-2'

    def test_state_compares_with_enum(self):
        assert Instance(state='running').state == InstanceState.RUNNING

    def test_instance_type_values(self):
        assert 'm1.small' in InstanceType.values()
        assert 'c1.xlarge' in InstanceType.values()


class TestZones:
    def test_regions_and_zones(self):
        zones = Zones()
        assert 'us-east' in zones.regions()
        assert 'us-east-1a' in zones.zones_in('us-east')
        assert zones.zones_in('nowhere') == []

    def test_validation(self):
        zones = Zones()
        assert zones.is_valid('eu-west-1a')
        assert not zones.is_valid('eu-west-9z')
