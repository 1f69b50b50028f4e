import pytest
from unittest.mock import Mock

from ec2_client.core.logger import Logger
from ec2_client.handlers.api_client import APIClient
from ec2_client.handlers.response import ParsedResponse
from ec2_client.models.credential import Credential


NS = 'http://ec2.amazonaws.com/doc/2008-12-01/'

DESCRIBE_INSTANCES_XML = f'''<?xml version="1.0" encoding="UTF-8"?>
<DescribeInstancesResponse xmlns="{NS}">
  <reservationSet>
    <item>
      <reservationId>r-44a5402d</reservationId>
      <ownerId>UYY3TLBUXIEON5NQVUUX6OMPWBZIQNFM</ownerId>
      <groupSet>
        <item><groupId>default</groupId></item>
        <item><groupId>web</groupId></item>
      </groupSet>
      <instancesSet>
        <item>
          <instanceId>i-28a64341</instanceId>
          <imageId>ami-6ea54007</imageId>
          <instanceState><code>16</code><name>running</name></instanceState>
          <privateDnsName>domU-12-31-35-00-1E-01.z-2.compute-1.internal</privateDnsName>
          <dnsName>ec2-72-44-33-4.z-2.compute-1.amazonaws.com</dnsName>
          <keyName>example-key-name</keyName>
          <amiLaunchIndex>0</amiLaunchIndex>
          <productCodes>
            <item><productCode>774F4FF8</productCode></item>
          </productCodes>
          <instanceType>m1.small</instanceType>
          <launchTime>2007-08-07T11:54:42.000Z</launchTime>
          <placement><availabilityZone>us-east-1b</availabilityZone></placement>
          <kernelId>aki-ba3adfd3</kernelId>
          <ramdiskId>ari-badbad00</ramdiskId>
        </item>
        <item>
          <instanceId>i-28a64342</instanceId>
          <imageId>ami-6ea54007</imageId>
          <instanceState><code>0</code><name>pending</name></instanceState>
          <amiLaunchIndex>1</amiLaunchIndex>
          <instanceType>m1.small</instanceType>
        </item>
      </instancesSet>
    </item>
    <item>
      <reservationId>r-55b6513e</reservationId>
      <ownerId>UYY3TLBUXIEON5NQVUUX6OMPWBZIQNFM</ownerId>
      <groupSet>
        <item><groupId>db</groupId></item>
      </groupSet>
      <instancesSet>
        <item>
          <instanceId>i-39b75453</instanceId>
          <imageId>ami-7fb65118</imageId>
          <instanceState><code>48</code><name>terminated</name></instanceState>
          <amiLaunchIndex>0</amiLaunchIndex>
          <instanceType>c1.medium</instanceType>
        </item>
      </instancesSet>
    </item>
  </reservationSet>
</DescribeInstancesResponse>
'''.encode('utf-8')

RUN_INSTANCES_XML = f'''<?xml version="1.0" encoding="UTF-8"?>
<RunInstancesResponse xmlns="{NS}">
  <reservationId>r-47a5402e</reservationId>
  <ownerId>495219933132</ownerId>
  <groupSet>
    <item><groupId>default</groupId></item>
  </groupSet>
  <instancesSet>
    <item>
      <instanceId>i-2ba64342</instanceId>
      <imageId>ami-60a54009</imageId>
      <instanceState><code>0</code><name>pending</name></instanceState>
      <amiLaunchIndex>0</amiLaunchIndex>
      <instanceType>m1.small</instanceType>
      <launchTime>2007-08-07T11:51:50.000Z</launchTime>
      <placement><availabilityZone>us-east-1b</availabilityZone></placement>
    </item>
    <item>
      <instanceId>i-2bc64242</instanceId>
      <imageId>ami-60a54009</imageId>
      <instanceState><code>0</code><name>pending</name></instanceState>
      <amiLaunchIndex>1</amiLaunchIndex>
      <instanceType>m1.small</instanceType>
    </item>
  </instancesSet>
</RunInstancesResponse>
'''.encode('utf-8')

TERMINATE_INSTANCES_XML = f'''<?xml version="1.0" encoding="UTF-8"?>
<TerminateInstancesResponse xmlns="{NS}">
  <instancesSet>
    <item>
      <instanceId>i-3ea74257</instanceId>
      <shutdownState><code>32</code><name>shutting-down</name></shutdownState>
      <previousState><code>16</code><name>running</name></previousState>
    </item>
  </instancesSet>
</TerminateInstancesResponse>
'''.encode('utf-8')

ERROR_XML = f'''<?xml version="1.0" encoding="UTF-8"?>
<Response xmlns="{NS}">
  <Errors>
    <Error><Code>InvalidInstanceID.NotFound</Code><Message>The instance ID 'i-00000000' does not exist</Message></Error>
    <Error><Code>AuthFailure</Code><Message>Second error</Message></Error>
  </Errors>
  <RequestID>ea966190-f9aa-478e-9ede-cb5432daacc0</RequestID>
</Response>
'''.encode('utf-8')


@pytest.fixture(autouse=True)
def reset_logger():
    """Keep the logger singleton from leaking between tests."""
    yield
    Logger.reset()


@pytest.fixture(autouse=True)
def clear_credential_env(monkeypatch):
    monkeypatch.delenv('EC2_ACCESS_KEY_ID', raising=False)
    monkeypatch.delenv('EC2_SECRET_ACCESS_KEY', raising=False)


@pytest.fixture
def credential():
    return Credential('AKIDEXAMPLE', 'secret')


@pytest.fixture
def api_client(credential):
    return APIClient(credential, endpoint='http://example-host/')


@pytest.fixture
def mock_api_client():
    """APIClient stand-in whose send() answers with a preset body."""
    client = Mock(spec=APIClient)

    def respond_with(body):
        client.send.return_value = ParsedResponse(body)
        return client

    client.respond_with = respond_with
    return client


def http_response(body: bytes, status_code: int = 200):
    """Build a fake requests.Response."""
    response = Mock()
    response.status_code = status_code
    response.content = body
    response.text = body.decode('utf-8', errors='replace')
    response.headers = {'Content-Type': 'text/xml'}
    return response
