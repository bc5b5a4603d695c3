def send_message(sqs, queue_url, cfg):
    print("Sending message to SQS...")
    sqs.send_message(
        QueueUrl=queue_url,
        MessageBody=cfg['MESSAGE_BODY'],
        MessageAttributes={
            'Title': {'DataType': 'String', 'StringValue': cfg['MESSAGE_TITLE']}
        },
    )
    print("Message sent to SQS")

def check_messages(sqs, queue_url):
    attrs = sqs.get_queue_attributes(
        QueueUrl=queue_url,
        AttributeNames=['ApproximateNumberOfMessages'],
    )['Attributes']
    count = int(attrs['ApproximateNumberOfMessages'])
    print(f"Number of messages in SQS queue: {count}")
    return count

def receive_message(sqs, queue_url):
    """Receive at most one message; print it and delete it by receipt handle.

    Returns the message, or None when the queue came back empty. An empty
    receive is not retried.
    """
    print("Receiving message from SQS...")
    messages = sqs.receive_message(
        QueueUrl=queue_url,
        MaxNumberOfMessages=1,
        MessageAttributeNames=['All'],
    ).get('Messages', [])
    if not messages:
        print("No messages in the queue")
        return None

    message = messages[0]
    title = message.get('MessageAttributes', {}).get('Title', {}).get('StringValue', '(none)')
    print(f"Message title: {title}")
    print(f"Message body: {message['Body']}")
    sqs.delete_message(QueueUrl=queue_url, ReceiptHandle=message['ReceiptHandle'])
    return message
