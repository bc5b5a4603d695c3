def upload_file(s3, bucket, cfg):
    print("Uploading file to S3...")
    s3.put_object(Bucket=bucket, Key=cfg['OBJECT_KEY'], Body=b'')
    print("File uploaded to S3")

def purge_bucket(s3, bucket, page_size=None):
    """Delete every object in ``bucket`` one at a time.

    Walks list_objects_v2 pages, feeding NextContinuationToken back in until
    a page comes back with IsTruncated false. A failed delete, or a
    truncated page without a token, propagates and leaves the remaining
    objects in place. Returns the number of deletes issued.
    """
    deleted = 0
    token = None
    while True:
        params = {'Bucket': bucket}
        if token:
            params['ContinuationToken'] = token
        if page_size:
            params['MaxKeys'] = page_size
        page = s3.list_objects_v2(**params)

        for obj in page.get('Contents', []):
            s3.delete_object(Bucket=bucket, Key=obj['Key'])
            deleted += 1
            print(f"Deleted object: {obj['Key']}")

        if not page.get('IsTruncated'):
            return deleted
        token = page.get('NextContinuationToken')
        if not token:
            raise RuntimeError(f"truncated listing of {bucket} without a continuation token")
