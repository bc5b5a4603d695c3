import os, time, json
import boto3
from botocore.exceptions import BotoCoreError, ClientError

DEFAULTS = {
    'REGION': 'us-west-1',
    'AMI_ID': 'ami-0d53d72369335a9d6',
    'INSTANCE_TYPE': 't2.micro',
    'BUCKET_PREFIX': 'my-test-bucket',
    'QUEUE_PREFIX': 'my-test-queue',
    'OBJECT_KEY': 'CSE546test.txt',
    'MESSAGE_BODY': 'This is a test message',
    'MESSAGE_TITLE': 'test message',
    'CREATE_WAIT_SECONDS': '60',
    'PRE_TEARDOWN_WAIT_SECONDS': '10',
    'POST_TEARDOWN_WAIT_SECONDS': '60',
    'CW_LOG_GROUP': '/demo/resource-lifecycle',
    'CW_LOG_STREAM': 'run',
    'CW_METRIC_NAMESPACE': 'ResourceLifecycleDemo',
    'CW_METRIC_NAME': 'StepsCompleted',
    'DISABLE_CW_LOGS': 'false',
    'DISABLE_CW_METRICS': 'false',
}

STATE_PATH = 'state/stack_state.json'

def load_config(path='config.txt'):
    cfg = dict(DEFAULTS)
    if os.path.exists(path):
        with open(path, 'r') as f:
            for line in f:
                line=line.strip()
                if not line or line.startswith('#') or '=' not in line:
                    continue
                k,v = line.split('=',1)
                cfg[k.strip()] = v.strip()
    return cfg

def _flag(cfg, key):
    return cfg.get(key,'').lower() == 'true'

def _session(cfg):
    """boto3 session for the configured region.

    Explicit keys in the config win over the default credential chain; a
    half-set key pair is rejected.
    """
    kwargs = {'region_name': cfg['REGION']}
    key_id = cfg.get('AWS_ACCESS_KEY_ID')
    secret = cfg.get('AWS_SECRET_ACCESS_KEY')
    if bool(key_id) != bool(secret):
        raise ValueError("AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY must be set together")
    if key_id:
        kwargs['aws_access_key_id'] = key_id
        kwargs['aws_secret_access_key'] = secret
        if cfg.get('AWS_SESSION_TOKEN'):
            kwargs['aws_session_token'] = cfg['AWS_SESSION_TOKEN']
    return boto3.session.Session(**kwargs)

def aws_clients(cfg):
    session = _session(cfg)
    return session.client('ec2'), session.client('s3'), session.client('sqs')

def _error_code(e):
    if isinstance(e, ClientError):
        return e.response.get('Error',{}).get('Code','')
    return type(e).__name__

def _ensure_log_stream(logs, log_group, log_stream):
    try:
        logs.create_log_group(logGroupName=log_group)
    except ClientError as e:
        if e.response['Error']['Code'] != 'ResourceAlreadyExistsException':
            raise
    try:
        logs.create_log_stream(logGroupName=log_group, logStreamName=log_stream)
    except ClientError as e:
        if e.response['Error']['Code'] != 'ResourceAlreadyExistsException':
            raise

def log_to_cw(message, cfg):
    if _flag(cfg, 'DISABLE_CW_LOGS'):
        print(f"[LogDisabled] {message}")
        return
    log_group = cfg['CW_LOG_GROUP']
    log_stream = cfg['CW_LOG_STREAM']
    try:
        logs = _session(cfg).client('logs')
        _ensure_log_stream(logs, log_group, log_stream)
        logs.put_log_events(
            logGroupName=log_group,
            logStreamName=log_stream,
            logEvents=[{'timestamp': int(time.time() * 1000), 'message': message}],
        )
        print(f"[CloudWatchLog] {message}")
    except (ClientError, BotoCoreError) as e:
        print(f"[LogFallback] {message} ({_error_code(e)})")

def send_cw_metric(value, cfg):
    name = f"{cfg['CW_METRIC_NAMESPACE']}/{cfg['CW_METRIC_NAME']}={value}"
    if _flag(cfg, 'DISABLE_CW_METRICS'):
        print(f"[MetricDisabled] {name}")
        return
    try:
        cw = _session(cfg).client('cloudwatch')
        cw.put_metric_data(
            Namespace=cfg['CW_METRIC_NAMESPACE'],
            MetricData=[{
                'MetricName': cfg['CW_METRIC_NAME'],
                'Value': float(value)
            }]
        )
        print(f"[Metric] {name}")
    except (ClientError, BotoCoreError) as e:
        print(f"[MetricFallback] {name} ({_error_code(e)})")

def save_state(obj, path=STATE_PATH):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, 'w') as f:
        json.dump(obj, f, indent=2)

def load_state(path=STATE_PATH):
    if not os.path.exists(path):
        return {}
    with open(path, 'r') as f:
        return json.load(f)
