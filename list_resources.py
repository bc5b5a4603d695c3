import sys
from aws_utils import load_config, aws_clients

def list_resources(ec2, s3, sqs):
    print("Listing resources...")

    print("EC2 Instances:")
    for reservation in ec2.describe_instances().get('Reservations', []):
        for instance in reservation['Instances']:
            if instance['State']['Name'] == 'running':
                print(f"  {instance['InstanceId']}")

    print("S3 Buckets:")
    for bucket in s3.list_buckets().get('Buckets', []):
        print(f"  {bucket['Name']}")

    print("SQS Queues:")
    for queue_url in sqs.list_queues().get('QueueUrls', []):
        print(f"  {queue_url}")

def main():
    cfg = load_config(sys.argv[1] if len(sys.argv) > 1 else 'config.txt')
    list_resources(*aws_clients(cfg))

if __name__ == "__main__":
    main()
