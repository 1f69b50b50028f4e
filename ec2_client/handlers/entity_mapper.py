"""
Entity mapping module for EC2 API Client.
Walks reservation and instance record sets into Reservation and Instance objects.

The same routine maps DescribeInstances and RunInstances responses.
"""

from datetime import datetime
from typing import Dict, List, Optional, Tuple

from ec2_client.core.logger import get_logger
from ec2_client.handlers.response import ParsedResponse
from ec2_client.models.instance import Instance, Reservation, StateChange


RESERVATION_SET_PATH = '//ec2:reservationSet/ec2:item'
RUN_RESULT_PATH = '//ec2:RunInstancesResponse'
INSTANCES_SET_PATH = '//ec2:instancesSet/ec2:item'


def _text(response: ParsedResponse, path: str, node) -> str:
    return response.evaluate(f'string({path}/text())', node)


def _parse_launch_time(value: str) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        get_logger().warning(f"Unrecognised launchTime '{value}', leaving it unset")
        return None


def _parse_launch_index(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        return 0


def map_instance(node, response: ParsedResponse, reservation_id: str = '',
                 owner_id: str = '', security_groups: Tuple[str, ...] = ()) -> Instance:
    """
    Map one instancesSet item.

    Absent fields keep their zero value. Reservation-scoped fields are
    passed in and copied onto the instance.
    """
    product_codes = tuple(
        _text(response, 'ec2:productCode', item)
        for item in response.query('ec2:productCodes/ec2:item', node)
    )

    return Instance(
        id=_text(response, 'ec2:instanceId', node),
        instance_type=_text(response, 'ec2:instanceType', node),
        image_id=_text(response, 'ec2:imageId', node),
        kernel_id=_text(response, 'ec2:kernelId', node),
        ramdisk_id=_text(response, 'ec2:ramdiskId', node),
        state=_text(response, 'ec2:instanceState/ec2:name', node),
        dns_name=_text(response, 'ec2:dnsName', node),
        private_dns_name=_text(response, 'ec2:privateDnsName', node),
        key_name=_text(response, 'ec2:keyName', node),
        launch_time=_parse_launch_time(_text(response, 'ec2:launchTime', node)),
        launch_index=_parse_launch_index(_text(response, 'ec2:amiLaunchIndex', node)),
        placement=_text(response, 'ec2:placement/ec2:availabilityZone', node),
        product_codes=product_codes,
        security_groups=security_groups,
        owner_id=owner_id,
        reservation_id=reservation_id,
    )


def map_reservation(node, response: ParsedResponse) -> Tuple[Reservation, Dict[str, Instance]]:
    """
    Map a reservation node (a reservationSet item or a RunInstancesResponse).

    Returns:
        The Reservation and its instances keyed by instance id. A repeated
        instance id overwrites the earlier record.
    """
    reservation_id = _text(response, 'ec2:reservationId', node)
    owner_id = _text(response, 'ec2:ownerId', node)
    security_groups = tuple(
        _text(response, 'ec2:groupId', group)
        for group in response.query('ec2:groupSet/ec2:item', node)
    )

    instances: Dict[str, Instance] = {}
    for instance_node in response.query('ec2:instancesSet/ec2:item', node):
        instance = map_instance(
            instance_node, response, reservation_id, owner_id, security_groups
        )
        instances[instance.id] = instance

    reservation = Reservation(
        id=reservation_id,
        owner_id=owner_id,
        security_groups=security_groups,
        instances=tuple(instances.values()),
    )
    return reservation, instances


def map_reservations(response: ParsedResponse,
                     path: str = RESERVATION_SET_PATH) -> Tuple[List[Reservation], Dict[str, Instance]]:
    """
    Map every reservation node matching ``path``.

    Instance maps are merged in document order; on a repeated instance id
    the later reservation wins.
    """
    reservations: List[Reservation] = []
    instances: Dict[str, Instance] = {}
    for node in response.query(path):
        reservation, reservation_instances = map_reservation(node, response)
        reservations.append(reservation)
        instances.update(reservation_instances)
    return reservations, instances


def map_state_changes(response: ParsedResponse) -> Dict[str, StateChange]:
    """Map a TerminateInstances result, keyed by instance id."""
    changes: Dict[str, StateChange] = {}
    for node in response.query(INSTANCES_SET_PATH):
        change = StateChange(
            instance_id=_text(response, 'ec2:instanceId', node),
            shutdown_state=_text(response, 'ec2:shutdownState/ec2:name', node),
            previous_state=_text(response, 'ec2:previousState/ec2:name', node),
        )
        changes[change.instance_id] = change
    return changes
