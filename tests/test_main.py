import pytest
from unittest.mock import Mock
import main
import aws_utils
from botocore.exceptions import ClientError
from aws_utils import load_state


@pytest.fixture
def sleeps(monkeypatch):
    calls = []
    monkeypatch.setattr(main.time, 'sleep', calls.append)
    return calls

def test_run_end_to_end(clients, cfg, sleeps, capsys):
    ec2, s3, sqs = clients

    main.run(cfg)

    assert sleeps == [60, 10, 60]
    assert s3.list_buckets()['Buckets'] == []
    assert 'QueueUrls' not in sqs.list_queues()
    assert load_state() == {}
    out = capsys.readouterr().out
    assert "Number of messages in SQS queue: 1" in out
    assert "Number of messages in SQS queue: 0" in out
    assert f"Deleted object: {cfg['OBJECT_KEY']}" in out
    assert "Message body: This is a test message" in out

def test_wait_durations_come_from_config(clients, cfg, sleeps):
    cfg['CREATE_WAIT_SECONDS'] = '1'
    cfg['PRE_TEARDOWN_WAIT_SECONDS'] = '2'
    cfg['POST_TEARDOWN_WAIT_SECONDS'] = '3'

    main.run(cfg)

    assert sleeps == [1, 2, 3]

def test_main_reports_error_and_exits(monkeypatch, sleeps, capsys):
    monkeypatch.setattr(main, 'run', Mock(side_effect=RuntimeError('no credentials')))

    with pytest.raises(SystemExit) as exc:
        main.main(['missing.txt'])

    assert exc.value.code == 1
    assert "An error occurred: RuntimeError('no credentials')" in capsys.readouterr().err

def test_failure_midway_skips_teardown(monkeypatch, clients, cfg, sleeps):
    ec2, s3, sqs = clients
    monkeypatch.setattr(main, 'upload_file', Mock(side_effect=RuntimeError('boom')))

    with pytest.raises(RuntimeError):
        main.run(cfg)

    st = load_state()
    assert st['BucketName'] in [b['Name'] for b in s3.list_buckets()['Buckets']]
    assert sleeps == [60]

def test_run_completes_when_metrics_are_denied(monkeypatch, clients, cfg, sleeps, capsys):
    ec2, s3, sqs = clients
    real_session = aws_utils._session

    def denying_session(c):
        session = real_session(c)
        make_client = session.client

        def client(name, **kwargs):
            cl = make_client(name, **kwargs)
            if name == 'cloudwatch':
                cl.put_metric_data = Mock(side_effect=ClientError(
                    {'Error': {'Code': 'AccessDenied', 'Message': 'denied'}}, 'PutMetricData'))
            return cl
        session.client = client
        return session
    monkeypatch.setattr(aws_utils, '_session', denying_session)

    main.run(cfg)

    assert s3.list_buckets()['Buckets'] == []
    assert 'QueueUrls' not in sqs.list_queues()
    assert capsys.readouterr().out.count('[MetricFallback]') == 2
