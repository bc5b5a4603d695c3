import sys
from botocore.exceptions import ClientError
from aws_utils import load_config, aws_clients, log_to_cw, send_cw_metric, load_state, save_state, STATE_PATH
from bucket_ops import purge_bucket

def delete_resources(ec2, s3, sqs, instance_id, bucket, queue_url, cfg):
    log_to_cw("Deleting resources...", cfg)

    # bucket must be empty before delete_bucket
    purge_bucket(s3, bucket)

    ec2.terminate_instances(InstanceIds=[instance_id])
    log_to_cw(f"EC2 instance {instance_id} termination initiated", cfg)

    s3.delete_bucket(Bucket=bucket)
    log_to_cw(f"S3 bucket {bucket} deleted", cfg)

    sqs.delete_queue(QueueUrl=queue_url)
    log_to_cw(f"SQS queue {queue_url} deleted", cfg)

    send_cw_metric(1, cfg)

# error codes meaning the resource no longer exists
GONE = {
    'InvalidInstanceID.NotFound',
    'NoSuchBucket',
    'AWS.SimpleQueueService.NonExistentQueue',
    'QueueDoesNotExist',
}

def _gone(e):
    return e.response.get('Error',{}).get('Code') in GONE

def cleanup_from_state(ec2, s3, sqs, cfg, state_path=STATE_PATH):
    """Tear down whatever the state file still records.

    Used after an aborted run; each resource is attempted independently and
    only the ones removed (or already missing) are dropped from the state.
    """
    st = load_state(state_path)
    log_to_cw("Cleaning up resources from state...", cfg)

    iid = st.get('InstanceId')
    if iid:
        try:
            ec2.terminate_instances(InstanceIds=[iid])
            log_to_cw(f"EC2 instance {iid} termination initiated", cfg)
            del st['InstanceId']
        except ClientError as e:
            print("Instance terminate:", e)
            if _gone(e):
                del st['InstanceId']

    bucket = st.get('BucketName')
    if bucket:
        try:
            purge_bucket(s3, bucket)
            s3.delete_bucket(Bucket=bucket)
            log_to_cw(f"S3 bucket {bucket} deleted", cfg)
            del st['BucketName']
        except ClientError as e:
            print("Bucket delete:", e)
            if _gone(e):
                del st['BucketName']

    queue_url = st.get('QueueUrl')
    if queue_url:
        try:
            sqs.delete_queue(QueueUrl=queue_url)
            log_to_cw(f"SQS queue {queue_url} deleted", cfg)
            del st['QueueUrl']
        except ClientError as e:
            print("Queue delete:", e)
            if _gone(e):
                del st['QueueUrl']

    if not {'InstanceId', 'BucketName', 'QueueUrl'} & set(st):
        st = {}  # clear
    save_state(st, state_path)
    return st

def main():
    cfg = load_config(sys.argv[1] if len(sys.argv) > 1 else 'config.txt')
    ec2, s3, sqs = aws_clients(cfg)
    cleanup_from_state(ec2, s3, sqs, cfg)
    print("Destroyed.")

if __name__ == "__main__":
    main()
