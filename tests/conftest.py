import os
import pytest
import boto3
from moto import mock_aws
from aws_utils import DEFAULTS

REGION = 'us-west-1'

@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Mocked AWS Credentials for moto."""
    monkeypatch.setenv('AWS_ACCESS_KEY_ID', 'testing')
    monkeypatch.setenv('AWS_SECRET_ACCESS_KEY', 'testing')
    monkeypatch.setenv('AWS_SECURITY_TOKEN', 'testing')
    monkeypatch.setenv('AWS_SESSION_TOKEN', 'testing')
    monkeypatch.setenv('AWS_DEFAULT_REGION', REGION)

@pytest.fixture(autouse=True)
def workdir(tmp_path, monkeypatch):
    """Keep state/ files out of the repo."""
    monkeypatch.chdir(tmp_path)
    return tmp_path

@pytest.fixture
def cfg():
    c = dict(DEFAULTS)
    c['REGION'] = REGION
    c['AMI_ID'] = 'ami-12345678'
    c['DISABLE_CW_LOGS'] = 'true'
    return c

@pytest.fixture
def clients():
    with mock_aws():
        yield (
            boto3.client('ec2', region_name=REGION),
            boto3.client('s3', region_name=REGION),
            boto3.client('sqs', region_name=REGION),
        )

@pytest.fixture
def bucket(clients):
    _, s3, _ = clients
    s3.create_bucket(Bucket='test-bucket', CreateBucketConfiguration={'LocationConstraint': REGION})
    return 'test-bucket'

@pytest.fixture
def queue_url(clients):
    _, _, sqs = clients
    return sqs.create_queue(QueueName='test-queue')['QueueUrl']


class FakeS3:
    """Serves scripted list_objects_v2 pages and records every call."""

    def __init__(self, pages):
        self.pages = list(pages)
        self.calls = []

    def list_objects_v2(self, **kwargs):
        self.calls.append(('list', kwargs))
        return self.pages.pop(0)

    def delete_object(self, **kwargs):
        self.calls.append(('delete', kwargs['Key']))
        return {}

    def delete_bucket(self, **kwargs):
        self.calls.append(('delete_bucket', kwargs['Bucket']))
        return {}
