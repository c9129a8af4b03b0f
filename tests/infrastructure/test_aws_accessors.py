"""Tests for the AWS accessors against moto."""

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError, NoCredentialsError
from moto import mock_aws

from cloudtag.application.tag.service import TagManager
from cloudtag.config.schemas import AppConfig, AWSProviderConfig
from cloudtag.domain.tag import (
    InvalidTagError,
    PermissionDeniedError,
    ProviderError,
    ResourceIdentity,
    ResourceKind,
    ResourceNotFoundError,
    Tag,
    TransientNetworkError,
    UnsupportedKindError,
)
from cloudtag.providers.aws import AWSClient, create_aws_registry
from cloudtag.providers.aws.exceptions import translate_aws_error


@pytest.fixture
def aws_client():
    """AWS client inside a moto context."""
    with mock_aws():
        yield AWSClient(AWSProviderConfig(region="us-east-1"))


@pytest.fixture
def tag_manager(aws_client, waiter):
    config = AppConfig.from_dict({"provider": {"type": "aws"}})
    return TagManager(create_aws_registry(config, aws_client=aws_client), waiter=waiter)


@pytest.fixture
def ec2_instance(aws_client):
    ec2 = aws_client.ec2_client
    image_id = ec2.describe_images(Owners=["amazon"])["Images"][0]["ImageId"]
    response = ec2.run_instances(
        ImageId=image_id,
        InstanceType="t2.micro",
        MinCount=1,
        MaxCount=1,
        TagSpecifications=[
            {
                "ResourceType": "instance",
                "Tags": [{"Key": "Name", "Value": "web-01"}, {"Key": "env", "Value": "prod"}],
            }
        ],
    )
    return response["Instances"][0]["InstanceId"]


@pytest.fixture
def ebs_volume(aws_client):
    volume = aws_client.ec2_client.create_volume(
        AvailabilityZone="us-east-1a",
        Size=8,
        TagSpecifications=[{"ResourceType": "volume", "Tags": [{"Key": "env", "Value": "dev"}]}],
    )
    return volume["VolumeId"]


@pytest.fixture
def eks_cluster(aws_client):
    ec2 = aws_client.ec2_client
    vpc_id = ec2.create_vpc(CidrBlock="10.0.0.0/16")["Vpc"]["VpcId"]
    subnet_id = ec2.create_subnet(VpcId=vpc_id, CidrBlock="10.0.0.0/24")["Subnet"]["SubnetId"]
    aws_client.eks_client.create_cluster(
        name="tagged-cluster",
        roleArn="arn:aws:iam::123456789012:role/eks-cluster",
        resourcesVpcConfig={"subnetIds": [subnet_id]},
        tags={"tier": "gold"},
    )
    return "tagged-cluster"


def _identity(resource_id):
    return ResourceIdentity(name_id=resource_id, system_id=resource_id)


@pytest.mark.aws
class TestEC2InstanceTags:
    def test_list_tags(self, tag_manager, ec2_instance):
        tags = tag_manager.list_tag(ResourceKind.VM, _identity(ec2_instance))
        assert set(tags) == {Tag(key="Name", value="web-01"), Tag(key="env", value="prod")}

    def test_add_get_remove(self, tag_manager, ec2_instance):
        vm = _identity(ec2_instance)

        tag_manager.add_tag(ResourceKind.VM, vm, Tag(key="team", value="core"))
        assert tag_manager.get_tag(ResourceKind.VM, vm, "team") == Tag(key="team", value="core")

        tag_manager.remove_tag(ResourceKind.VM, vm, "env")
        assert tag_manager.get_tag(ResourceKind.VM, vm, "env") == Tag()
        assert len(tag_manager.list_tag(ResourceKind.VM, vm)) == 2

    def test_remove_absent_key(self, tag_manager, ec2_instance):
        vm = _identity(ec2_instance)
        assert tag_manager.remove_tag(ResourceKind.VM, vm, "missing") is True
        assert len(tag_manager.list_tag(ResourceKind.VM, vm)) == 2

    def test_find_skips_terminated_instances(self, tag_manager, aws_client, ec2_instance):
        image_id = aws_client.ec2_client.describe_images(Owners=["amazon"])["Images"][0]["ImageId"]
        other = aws_client.ec2_client.run_instances(
            ImageId=image_id,
            InstanceType="t2.micro",
            MinCount=1,
            MaxCount=1,
            TagSpecifications=[{"ResourceType": "instance", "Tags": [{"Key": "env", "Value": "prod"}]}],
        )["Instances"][0]["InstanceId"]
        aws_client.ec2_client.terminate_instances(InstanceIds=[other])

        matches = tag_manager.find_tag(ResourceKind.VM, "prod")

        assert [(m.identity.system_id, m.identity.name_id) for m in matches] == [(ec2_instance, "web-01")]

    def test_missing_instance(self, tag_manager, aws_client):
        with pytest.raises(ResourceNotFoundError):
            tag_manager.list_tag(ResourceKind.VM, _identity("i-0123456789abcdef0"))


@pytest.mark.aws
class TestEBSVolumeTags:
    def test_add_and_list(self, tag_manager, ebs_volume):
        disk = _identity(ebs_volume)

        tag_manager.add_tag(ResourceKind.DISK, disk, Tag(key="backup", value="daily"))

        assert set(tag_manager.list_tag(ResourceKind.DISK, disk)) == {
            Tag(key="env", value="dev"),
            Tag(key="backup", value="daily"),
        }

    def test_find(self, tag_manager, ebs_volume):
        matches = tag_manager.find_tag(ResourceKind.DISK, "dev")
        assert [m.identity.system_id for m in matches] == [ebs_volume]


@pytest.mark.aws
class TestEKSClusterTags:
    def test_add_and_remove(self, tag_manager, eks_cluster):
        cluster = _identity(eks_cluster)

        tag_manager.add_tag(ResourceKind.CLUSTER, cluster, Tag(key="env", value="prod"))
        tag_manager.remove_tag(ResourceKind.CLUSTER, cluster, "tier")

        assert tag_manager.list_tag(ResourceKind.CLUSTER, cluster) == [Tag(key="env", value="prod")]

    def test_find(self, tag_manager, eks_cluster):
        matches = tag_manager.find_tag(ResourceKind.CLUSTER, "gold")
        assert [(m.identity.system_id, m.tag) for m in matches] == [
            (eks_cluster, Tag(key="tier", value="gold"))
        ]

    def test_missing_cluster(self, tag_manager):
        with pytest.raises(ResourceNotFoundError):
            tag_manager.get_tag(ResourceKind.CLUSTER, _identity("absent"), "tier")


@pytest.mark.aws
def test_unbound_kind_makes_no_call(tag_manager):
    with pytest.raises(UnsupportedKindError):
        tag_manager.add_tag(ResourceKind.SUBNET, _identity("subnet-1"), Tag(key="a", value="b"))


def _client_error(code):
    return ClientError({"Error": {"Code": code, "Message": code}}, "CreateTags")


@pytest.mark.unit
@pytest.mark.aws
@pytest.mark.parametrize(
    "error, expected",
    [
        (_client_error("InvalidInstanceID.NotFound"), ResourceNotFoundError),
        (_client_error("InvalidVolumeID.Malformed"), ResourceNotFoundError),
        (_client_error("ResourceNotFoundException"), ResourceNotFoundError),
        (_client_error("UnauthorizedOperation"), PermissionDeniedError),
        (_client_error("RequestLimitExceeded"), TransientNetworkError),
        (_client_error("TagLimitExceeded"), InvalidTagError),
        (_client_error("SomethingElse"), ProviderError),
        (NoCredentialsError(), PermissionDeniedError),
        (EndpointConnectionError(endpoint_url="https://ec2.us-east-1.amazonaws.com"), TransientNetworkError),
    ],
)
def test_translate_aws_error(error, expected):
    assert isinstance(translate_aws_error(error, "VM", "i-1"), expected)
