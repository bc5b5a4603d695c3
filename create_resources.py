import time, sys
from aws_utils import load_config, aws_clients, log_to_cw, send_cw_metric, save_state, STATE_PATH

def _stamp():
    return int(time.time() * 1000)

def create_instance(ec2, cfg):
    return ec2.run_instances(
        ImageId=cfg['AMI_ID'],
        InstanceType=cfg['INSTANCE_TYPE'],
        MinCount=1, MaxCount=1,
    )['Instances'][0]['InstanceId']

def create_bucket(s3, cfg):
    bucket = f"{cfg['BUCKET_PREFIX']}-{_stamp()}"
    params = {'Bucket': bucket}
    # us-east-1 is the only region that rejects an explicit constraint
    if cfg['REGION'] != 'us-east-1':
        params['CreateBucketConfiguration'] = {'LocationConstraint': cfg['REGION']}
    s3.create_bucket(**params)
    return bucket

def create_queue(sqs, cfg):
    return sqs.create_queue(QueueName=f"{cfg['QUEUE_PREFIX']}-{_stamp()}")['QueueUrl']

def create_resources(ec2, s3, sqs, cfg, state_path=STATE_PATH):
    """Create one instance, one bucket and one queue.

    State is saved after every create so destroy_resources.py can clean up
    whatever a failed run left behind.
    """
    log_to_cw("Creating resources...", cfg)
    state = {'Region': cfg['REGION']}

    # EC2
    state['InstanceId'] = create_instance(ec2, cfg)
    save_state(state, state_path)
    log_to_cw(f"EC2 instance created with ID: {state['InstanceId']}", cfg)

    # S3
    state['BucketName'] = create_bucket(s3, cfg)
    save_state(state, state_path)
    log_to_cw(f"S3 bucket created: {state['BucketName']}", cfg)

    # SQS
    state['QueueUrl'] = create_queue(sqs, cfg)
    save_state(state, state_path)
    log_to_cw(f"SQS queue created: {state['QueueUrl']}", cfg)

    send_cw_metric(1, cfg)
    return state

def main():
    cfg = load_config(sys.argv[1] if len(sys.argv) > 1 else 'config.txt')
    ec2, s3, sqs = aws_clients(cfg)
    state = create_resources(ec2, s3, sqs, cfg)
    print("Created:", state['InstanceId'], state['BucketName'], state['QueueUrl'])

if __name__ == "__main__":
    main()
