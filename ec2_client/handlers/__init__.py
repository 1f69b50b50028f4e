"""Request signing, transport, response parsing and instance operations."""

from ec2_client.handlers.signer import Signer, canonical_query, encode, string_to_sign
from ec2_client.handlers.request_builder import SignedRequest, build_signed_request, format_timestamp
from ec2_client.handlers.response import ParsedResponse, check_for_errors
from ec2_client.handlers.entity_mapper import map_reservation, map_reservations, map_state_changes
from ec2_client.handlers.api_client import APIClient
from ec2_client.handlers.instance_manager import InstanceManager
from ec2_client.handlers.instance_runner import InstanceRunner

__all__ = [
    'Signer',
    'canonical_query',
    'encode',
    'string_to_sign',
    'SignedRequest',
    'build_signed_request',
    'format_timestamp',
    'ParsedResponse',
    'check_for_errors',
    'map_reservation',
    'map_reservations',
    'map_state_changes',
    'APIClient',
    'InstanceManager',
    'InstanceRunner',
]
