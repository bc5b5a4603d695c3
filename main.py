# Single entrypoint: create, exercise and tear down one instance, bucket and queue
import time, sys
from aws_utils import load_config, aws_clients, log_to_cw, save_state, STATE_PATH
from create_resources import create_resources
from list_resources import list_resources
from bucket_ops import upload_file
from queue_ops import send_message, check_messages, receive_message
from destroy_resources import delete_resources

def pause(seconds, cfg):
    """Fixed-duration wait standing in for eventual consistency.

    Nothing is polled, so a slow provider can still make the next step fail.
    """
    log_to_cw(f"Waiting for {seconds} seconds (fixed delay, state not verified)...", cfg)
    time.sleep(seconds)

def run(cfg, state_path=STATE_PATH):
    ec2, s3, sqs = aws_clients(cfg)

    st = create_resources(ec2, s3, sqs, cfg, state_path)
    pause(int(cfg['CREATE_WAIT_SECONDS']), cfg)

    list_resources(ec2, s3, sqs)
    upload_file(s3, st['BucketName'], cfg)
    send_message(sqs, st['QueueUrl'], cfg)
    check_messages(sqs, st['QueueUrl'])
    receive_message(sqs, st['QueueUrl'])
    check_messages(sqs, st['QueueUrl'])

    pause(int(cfg['PRE_TEARDOWN_WAIT_SECONDS']), cfg)
    delete_resources(ec2, s3, sqs, st['InstanceId'], st['BucketName'], st['QueueUrl'], cfg)
    save_state({}, state_path)  # clear

    pause(int(cfg['POST_TEARDOWN_WAIT_SECONDS']), cfg)
    list_resources(ec2, s3, sqs)

def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    cfg = load_config(argv[0] if argv else 'config.txt')
    try:
        run(cfg)
    except Exception as e:
        # no rollback; python destroy_resources.py cleans up from state
        print(f"An error occurred: {e!r}", file=sys.stderr)
        sys.exit(1)
    print("\nDone.")

if __name__ == "__main__":
    main()
