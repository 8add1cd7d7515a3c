TEST_REGION = "us-east-1"
TEST_ACCOUNT_ID = "123456789012"
