from setuptools import setup, find_packages

version = '1.0'

setup(name='Ownerspec',
      version=version,
      description="Resolve chown style USER:GROUP arguments to numeric ids",
      long_description = open("README.rst").read() + "\n" + \
                         open("CHANGES").read(),
      author="Isotoma Limited",
      author_email="support@isotoma.com",
      license="Apache Software License",
      classifiers = [
          "Intended Audience :: System Administrators",
          "Operating System :: POSIX",
          "License :: OSI Approved :: Apache Software License",
          "Programming Language :: Python :: 3",
      ],
      packages=find_packages(),
      include_package_data=True,
      zip_safe=False,
      python_requires='>=3.10',
      install_requires=[
          'jinja2',
          'paramiko >= 2.2',
          'gevent',
      ],
      extras_require = {
          'test': ['mock'],
          },
      entry_points = """
      [console_scripts]
      ownerspec = ownerspec.main:main
      """
      )
