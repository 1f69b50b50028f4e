"""
Instance management module for EC2 API Client.
Describes, launches and terminates instances.
"""

from typing import Dict, List, Optional

from ec2_client.core.exceptions import InvalidArgumentError
from ec2_client.handlers.api_client import APIClient
from ec2_client.handlers.entity_mapper import map_reservations, map_state_changes
from ec2_client.handlers.instance_runner import InstanceRunner
from ec2_client.models.credential import Credential
from ec2_client.models.instance import Instance, Reservation, StateChange
from ec2_client.models.references import as_reference


def instance_parameters(instances) -> Dict[str, str]:
    """
    Build positional InstanceId.N parameters (1-based).

    Args:
        instances: None, a single reference value, or a list/tuple of them

    Raises:
        InvalidArgumentError: If any value is not an instance id or Instance
    """
    if instances is None:
        instances = []
    elif not isinstance(instances, (list, tuple)):
        instances = [instances]

    params = {}
    for position, value in enumerate(instances, start=1):
        params[f'InstanceId.{position}'] = as_reference(value).resolve_identifier()
    return params


class InstanceManager:
    """
    Gets details about current instances, runs new instances and terminates
    existing ones. Every call builds its own parameters; nothing is shared
    between calls.
    """

    def __init__(self, credential: Credential, api_client: Optional[APIClient] = None,
                 **client_options):
        """
        Initialize instance manager.

        Args:
            credential: Account credential
            api_client: Client to send requests with. Built from credential and
                client_options (endpoint, api_version, timeout, signer) when omitted.
        """
        self.credential = credential
        self.api_client = api_client or APIClient(credential, **client_options)
        self.logger = None

    def _get_logger(self):
        """Lazy logger initialization."""
        if self.logger is None:
            from ec2_client.core.logger import get_logger
            self.logger = get_logger()
        return self.logger

    def get_runner(self, image) -> InstanceRunner:
        """Create a launch configuration for the given image id."""
        return InstanceRunner(self, image)

    def describe_reservations(self, instances=None) -> List[Reservation]:
        """
        Describe reservations, optionally limited to some instances.

        Args:
            instances: None for all instances, or instance ids/Instance objects

        Returns:
            Reservations in response order
        """
        reservations, _ = self._describe(instances)
        return reservations

    def describe_instances(self, instances=None) -> Dict[str, Instance]:
        """
        Describe instances, optionally limited to some instances.

        Returns:
            Instances keyed by instance id
        """
        _, described = self._describe(instances)
        return described

    def describe_instance(self, instance) -> Optional[Instance]:
        """Fetch the current state of a single instance, or None if it is unknown."""
        described = self.describe_instances(instance)
        if len(described) != 1:
            return None
        return next(iter(described.values()))

    def _describe(self, instances):
        params = {'Action': 'DescribeInstances'}
        params.update(instance_parameters(instances))

        response = self.api_client.send(params)
        reservations, described = map_reservations(response)

        self._get_logger().info(
            f"Described {len(described)} instance(s) in {len(reservations)} reservation(s)"
        )
        return reservations, described

    def terminate_instances(self, instances) -> Dict[str, StateChange]:
        """
        Terminate one or more instances.

        Returns:
            State changes keyed by instance id

        Raises:
            InvalidArgumentError: If no instance is given
        """
        params = {'Action': 'TerminateInstances'}
        params.update(instance_parameters(instances))
        if len(params) == 1:
            raise InvalidArgumentError("At least one instance must be specified.")

        response = self.api_client.send(params)
        changes = map_state_changes(response)

        self._get_logger().info(f"Terminating {len(changes)} instance(s)")
        return changes
