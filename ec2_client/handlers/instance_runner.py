"""
Instance launching module for EC2 API Client.
Builds RunInstances configurations and launches them.
"""

import base64
from typing import Dict, Mapping

from ec2_client.core.exceptions import InvalidArgumentError
from ec2_client.handlers.entity_mapper import RUN_RESULT_PATH, map_reservations
from ec2_client.models.instance import Instance, InstanceType
from ec2_client.models.references import ById
from ec2_client.models.zones import Zones


MAX_USER_DATA_BYTES = 16000


def _position(key, what: str) -> int:
    """Validate a 1-based launch position from a sparse positional mapping."""
    if isinstance(key, bool):
        raise InvalidArgumentError(f"{what} keys must be numeric. Key {key!r} is not allowed.")
    if isinstance(key, int):
        position = key
    elif isinstance(key, str) and key.isascii() and key.isdigit():
        position = int(key)
    else:
        raise InvalidArgumentError(f"{what} keys must be numeric. Key {key!r} is not allowed.")

    if position <= 0:
        raise InvalidArgumentError(
            f"{what} keys start at 1. Can not specify a value for {key!r}."
        )
    return position


class InstanceRunner:
    """
    Launch configuration for instances of one image.

    Runners are immutable: every setter returns a new runner, so a configured
    runner can be reused as a starting point without affecting other launches.

    Example:
        runner = manager.get_runner('ami-12345678')
        instances = runner.set_number(2).set_user_data(script).run_instances()
    """

    def __init__(self, manager, image, parameters: Mapping[str, str] = None):
        """
        Args:
            manager: InstanceManager used to send the launch request
            image: Machine image identifier
        """
        self.manager = manager
        if parameters is None:
            image_id = ById(image, 'image').resolve_identifier()
            parameters = {
                'Action': 'RunInstances',
                'ImageId': image_id,
                'MinCount': '1',
                'MaxCount': '1',
            }
        self._parameters: Dict[str, str] = dict(parameters)

    def _with(self, **changes) -> 'InstanceRunner':
        parameters = dict(self._parameters)
        parameters.update(changes)
        return InstanceRunner(self.manager, None, parameters)

    def parameters(self) -> Dict[str, str]:
        """Fresh copy of the RunInstances parameters."""
        return dict(self._parameters)

    def set_number(self, minimum: int, maximum: int = 0) -> 'InstanceRunner':
        """
        Set how many instances to launch.

        Args:
            minimum: Launch fails unless at least this many instances can start
            maximum: Upper bound; defaults to minimum
        """
        try:
            minimum = int(minimum)
            maximum = int(maximum)
        except (TypeError, ValueError):
            raise InvalidArgumentError("Instance counts must be integers.")

        if minimum < 0 or maximum < 0:
            raise InvalidArgumentError("Instance counts can not be negative.")
        if minimum == 0 and maximum == 0:
            raise InvalidArgumentError("Can not launch zero instances.")

        return self._with(MinCount=str(minimum), MaxCount=str(max(maximum, minimum)))

    def set_key_name(self, key_name: str) -> 'InstanceRunner':
        """Note: launching without a key pair makes login impossible."""
        return self._with(KeyName=ById(key_name, 'key pair').resolve_identifier())

    def set_kernel_id(self, kernel_id: str) -> 'InstanceRunner':
        return self._with(KernelId=ById(kernel_id, 'kernel').resolve_identifier())

    def set_ramdisk_id(self, ramdisk_id: str) -> 'InstanceRunner':
        return self._with(RamdiskId=ById(ramdisk_id, 'ramdisk').resolve_identifier())

    def set_type(self, instance_type) -> 'InstanceRunner':
        """
        Set the instance type. Defaults to m1.small on the service side.

        Raises:
            InvalidArgumentError: If the type is not an InstanceType value
        """
        value = instance_type.value if isinstance(instance_type, InstanceType) else instance_type
        if value not in InstanceType.values():
            raise InvalidArgumentError(
                f"Invalid type {instance_type!r}. Must be one of: {', '.join(InstanceType.values())}."
            )
        return self._with(InstanceType=value)

    def set_placement_availability_zone(self, zone: str, zones: Zones = None) -> 'InstanceRunner':
        zones = zones or Zones()
        if not isinstance(zone, str) or not zones.is_valid(zone):
            raise InvalidArgumentError(
                f"Invalid zone {zone!r}. Must be one of: {', '.join(zones.zones())}."
            )
        return self._with(**{'Placement.AvailabilityZone': zone})

    def set_security_groups(self, groups: Mapping) -> 'InstanceRunner':
        """
        Set security groups by launch position.

        Args:
            groups: Mapping of 1-based launch position to group name. May be
                sparse if some launched instances need no group.
        """
        changes = {}
        for key, group in groups.items():
            position = _position(key, 'Security group')
            changes[f'SecurityGroup.{position}'] = ById(group, 'security group').resolve_identifier()
        return self._with(**changes)

    def set_block_device_mappings(self, mappings: Mapping) -> 'InstanceRunner':
        """
        Set block device mappings by launch position.

        Example (sdb -> instancestore0 for the first instance, sdc ->
        instancestore1 for the third)::

            runner.set_block_device_mappings({
                1: {'sdb': 'instancestore0'},
                3: {'sdc': 'instancestore1'},
            })
        """
        changes = {}
        for key, mapping in mappings.items():
            position = _position(key, 'Block device mapping')
            if not isinstance(mapping, Mapping) or len(mapping) != 1:
                raise InvalidArgumentError(
                    f"Mapping for instance {key!r} must be a single-entry mapping of device name to virtual name."
                )
            (device_name, virtual_name), = mapping.items()
            changes[f'BlockDeviceMapping.{position}.DeviceName'] = str(device_name)
            changes[f'BlockDeviceMapping.{position}.VirtualName'] = str(virtual_name)
        return self._with(**changes)

    def set_user_data(self, data) -> 'InstanceRunner':
        """
        Attach data retrievable by launched instances, e.g. configuration applied after boot.

        Args:
            data: str (measured as UTF-8) or bytes; at most 16000 bytes after stripping whitespace

        Raises:
            InvalidArgumentError: If the data exceeds 16000 bytes
        """
        raw = data if isinstance(data, bytes) else str(data).encode('utf-8')
        raw = raw.strip()
        if not raw:
            return self

        if len(raw) > MAX_USER_DATA_BYTES:
            raise InvalidArgumentError(
                f"User-data can not be more than {MAX_USER_DATA_BYTES} bytes in length "
                f"(got {len(raw)})."
            )

        return self._with(UserData=base64.b64encode(raw).decode('ascii'))

    def run_instances(self) -> Dict[str, Instance]:
        """
        Launch instances using this configuration.

        Returns:
            The freshly launched instances keyed by instance id
        """
        response = self.manager.api_client.send(self.parameters())
        _, instances = map_reservations(response, RUN_RESULT_PATH)
        return instances
